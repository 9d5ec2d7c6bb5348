# chatgateway

A small chat gateway built on aiohttp. A user who presents a JWT can open a chat topic over HTTP. Other users join that topic over a WebSocket. Each message a member sends is relayed to the other members of the topic.

## Installation

```
pip install .
```

## Running

```
chatgateway
chatgateway --host 127.0.0.1 --port 9000
```

| Option   | Default   | Meaning            |
|----------|-----------|--------------------|
| `--host` | `0.0.0.0` | address to bind    |
| `--port` | `8080`    | port to listen on  |

On start the command prints `Starting ChatGateway server...`. Log lines go to standard output through an `AsyncLogger`, with the form `[YYYY-MM-DD HH:MM:SS] message` in local time. Once the server is up the log reads `Listening on port <port>`. If the port cannot be bound, the log reads `Failed to listen on port <port>` and the command exits with status 1.

## Endpoints

- `GET /api/<anything>` replies `Hello world from Http!`.
- `POST /api/create/chat` opens a topic named after the token's `sub` claim. The token goes in a `bearer` request header. On success the reply is `201` with the body `Chat was launched successfully!`. A missing or undecodable token gets `403` with `Invalid Access Token.`.
- `GET /ws/<topic>` upgrades to a WebSocket and needs the same `bearer` header. A missing or bad token gets `403`. A path with no topic, or a topic that has not been opened, gets `400` with `Invalid WebSocket path.`.
  - A text message is relayed to the other members as `<username>: <message>`.
  - A binary message is relayed as the bytes of `<username>: ` followed by the message.
  - The sender does not receive its own message.
  - When a member disconnects, the remaining members receive `<username> left the topic.`.

## Tokens

`chatgateway.tokens.decode_token(token)` decodes a JWT into a frozen `JwtToken` with these fields:

- `username`, taken from `sub`
- `created_at`, taken from `iat` as a UTC `datetime`
- `expires_at`, taken from `exp` as a UTC `datetime`
- `authorities`

The payload must carry `sub` as a string, `iat` and `exp` as integers, and `authorities` as an array. If any of these is missing or malformed, `InvalidTokenError` is raised, which is a `ValueError`. The entries of `authorities` are not collected, so `JwtToken.authorities` is always empty. `JwtToken.from_claims(claims)` builds a token from an already decoded mapping.

## Using it as a library

```python
from aiohttp import web

from chatgateway.app import create_app
from chatgateway.logger import AsyncLogger

with AsyncLogger() as logger:
    web.run_app(create_app(logger), port=8080)
```

`create_app(logger)` returns an `aiohttp.web.Application` with the routes above. The application stores its `ChatController` under `chatgateway.app.CONTROLLER_KEY` and the logger under `chatgateway.app.LOGGER_KEY`.

`ChatController` provides these members:

- `register(app)` adds its routes to any application.
- `topics` is the set of opened topics.
- `online(topic)` gives the number of open connections on a topic.

Each connection is described by a `chatgateway.users.ActiveUser`. It holds the token, the topic and the login time.

`AsyncLogger(stream=None)` collects text passed to `write(text)` until it contains a newline. The whole pending text is then queued for the writer thread. `write` returns the logger, so calls can be chained. `close()` writes every queued line and stops the thread. Text still waiting for a newline is dropped. Writing after `close()` raises `RuntimeError`. The logger is also a context manager.

## Limitations

- Token signatures are not verified, and expiry times are not enforced.
- Topics and connection counts live in memory only. They are lost when the server stops.
- There is no way to close or delete a topic.
- The server speaks plain HTTP and WebSocket only, with no TLS.

## Tests

```
pip install .[test]
pytest
```