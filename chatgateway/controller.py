"""HTTP and WebSocket endpoints for creating and joining chats."""

from __future__ import annotations

from collections import Counter, defaultdict

from aiohttp import WSMsgType, web

from chatgateway.tokens import InvalidTokenError, JwtToken, decode_token
from chatgateway.users import ActiveUser

_INVALID_TOKEN = "Invalid Access Token."
_WS_PREFIX = "/ws/"


class ChatController:
    """Keeps the set of open chats and relays messages between their members."""

    def __init__(self) -> None:
        self.topics: set[str] = set()
        self.online_by_topic: Counter[str] = Counter()
        self._subscribers: defaultdict[str, set[web.WebSocketResponse]] = defaultdict(set)

    def register(self, app: web.Application) -> None:
        """Add the chat routes to ``app``."""
        app.router.add_post("/api/create/chat", self.create_chat)
        app.router.add_get(_WS_PREFIX + "{tail:.*}", self.websocket)

    @staticmethod
    def _authenticate(request: web.Request) -> JwtToken:
        raw = request.headers.get("bearer", "")
        if not raw:
            raise web.HTTPForbidden(text=_INVALID_TOKEN)
        try:
            return decode_token(raw)
        except InvalidTokenError:
            raise web.HTTPForbidden(reason="Invalid Access Token", text=_INVALID_TOKEN) from None

    async def create_chat(self, request: web.Request) -> web.Response:
        """Open a chat whose topic is the caller's username."""
        token = self._authenticate(request)
        await request.read()
        self.topics.add(token.username)
        return web.Response(
            status=201,
            text="Chat was launched successfully!",
            content_type="application/json",
        )

    async def websocket(self, request: web.Request) -> web.StreamResponse:
        """Join the chat named by the path after ``/ws/``."""
        path = request.rel_url.raw_path
        if len(path) > len(_WS_PREFIX):
            topic = path[len(_WS_PREFIX):]
            token = self._authenticate(request)
            if topic in self.topics:
                return await self._serve(request, ActiveUser(token, topic))
        raise web.HTTPBadRequest(text="Invalid WebSocket path.")

    def online(self, topic: str) -> int:
        """Number of connections currently open on ``topic``."""
        return self.online_by_topic.get(topic, 0)

    async def _serve(self, request: web.Request, user: ActiveUser) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        topic = user.topic
        name = user.jwt_token.username
        self._subscribers[topic].add(ws)
        self.online_by_topic[topic] += 1
        try:
            async for message in ws:
                if message.type is WSMsgType.TEXT:
                    await self._publish(topic, f"{name}: {message.data}", ws)
                elif message.type is WSMsgType.BINARY:
                    await self._publish(topic, name.encode() + b": " + message.data, ws)
        finally:
            members = self._subscribers[topic]
            members.discard(ws)
            if not members:
                del self._subscribers[topic]
            self.online_by_topic[topic] -= 1
            await self._publish(topic, f"{name} left the topic.", ws)
        return ws

    async def _publish(
        self, topic: str, payload: str | bytes, sender: web.WebSocketResponse
    ) -> None:
        for peer in list(self._subscribers.get(topic, ())):
            if peer is sender or peer.closed:
                continue
            try:
                if isinstance(payload, str):
                    await peer.send_str(payload)
                else:
                    await peer.send_bytes(payload)
            except ConnectionError:
                pass