# uniswap-api

A small Flask application that estimates how many tokens a Uniswap V2
swap returns. Given a pair's reserves, it applies the constant-product
formula with the 0.3% pool fee:

```
amount_out = amount_in * 997 * reserve_out / (reserve_in * 1000 + amount_in * 997)
```

All arithmetic is done on Python integers with integer division.

## What the package does not do

- It has no Ethereum node client. Reserves are read through an object
  you supply (see `EthClient` below); nothing in the package connects to
  the `NODE_URL` it reads from the environment.
- It installs no command. You build the application and start it
  yourself from Python.
- It does not set up logging. Messages go to the standard `logging`
  module under the `uniswap_api.api` logger, and the `log_level` setting
  is stored but not applied.

## The HTTP endpoint

`GET /estimate` takes four required query parameters:

| parameter    | meaning                                         |
|--------------|-------------------------------------------------|
| `pool`       | address of the Uniswap V2 pair                  |
| `src`        | address of the token being sold                 |
| `dst`        | address of the token being bought               |
| `src_amount` | amount sold, in the token's smallest units      |

`src_amount` is parsed by `parse_amount`: an optional sign, then decimal
digits or a `0x`, `0o` or `0b` prefix; a leading `0` means octal and
underscores between digits are accepted.

A successful call answers `200` with the amount as a string:

```json
{"amount": "25373450283"}
```

Failures answer with a JSON error body (`message` is left out when there
is none):

```json
{
  "status": 400,
  "code": "validation error",
  "message": "pool required field",
  "path": "/estimate",
  "timestamp": "2024-01-01T00:00:00Z"
}
```

- A missing or empty parameter gives `400` `validation error`.
- An exception raised by the service (for example by your reserve reader)
  gives `400` `bad request` with the exception text as the message.
- Anything else, such as an unparsable `src_amount` or a zero
  denominator in the formula, gives `500` `internal server error`.
- Unknown paths and wrong methods get Flask's own `404`/`405` responses.

CORS is handled for every response: preflight `OPTIONS` requests answer
`204` with the allowed origin and method, `Access-Control-Allow-Credentials:
true` and `Access-Control-Max-Age: 1000`. Origins may use a single `*`
wildcard; an empty list or `*` allows any origin. Allowed methods default
to `HEAD, GET, POST, PUT, DELETE, PATCH`.

## Configuration

`uniswap_api.config.load_env_config(environ=None)` reads an `Environment`
from the given mapping, or from `os.environ`:

| variable       | field          | default       |
|----------------|----------------|---------------|
| `NODE_URL`     | `node_url`     | required      |
| `PORT`         | `port`         | `1337`        |
| `LOG_LEVEL`    | `log_level`    | `trace`       |
| `CORS_ORIGINS` | `cors_origins` | `["*"]`       |
| `CORS_METHODS` | `cors_methods` | `[]`          |
| `APP_NAME`     | `app_name`     | `uniswap-api` |

Lists are comma-separated. `ConfigError` is raised when `NODE_URL` is
missing or `PORT` is not a 64-bit integer.

```python
from uniswap_api.config import load_env_config

env = load_env_config({"NODE_URL": "https://rpc.example.com", "CORS_METHODS": "GET,POST"})
print(env.port)          # 1337
print(env.cors_methods)  # ['GET', 'POST']
```

## Using it from Python

The pricing maths is available on its own:

```python
from uniswap_api.uniswap import output_amount

print(output_amount(10**19, 6897994292349957088357, 17580630745241))  # 25373450283
```

`hex_to_address` turns a hex string into a 20-byte address and
`sort_tokens` orders two addresses as the pair contract does.

`UniswapService` needs an object with a `get_reserves(pair_address)`
method that takes the 20-byte pool address and returns `PairReserves`,
as described by the `EthClient` protocol:

```python
from uniswap_api.eth import PairReserves
from uniswap_api.uniswap import UniswapService


class FixedReserves:
    def get_reserves(self, pair_address):
        return PairReserves(6897994292349957088357, 17580630745241)


service = UniswapService(FixedReserves())
amount = service.get_output_amount(
    "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
    "0xdAC17F958D2ee523a2206206994597C13D831ec7",
    "0x0d4a11d5eeaac28ec3f61d100daf4d40471f1852",
    10**19,
)
print(amount)  # 25373450283
```

Reserves are swapped when `src` is not the lower of the two addresses,
so the right reserve is used whichever token is sold.

To serve the API, build the Flask application with
`create_app(config, service)`, or wrap it in a `Server`:

```python
from uniswap_api.api import ApiConfig, Server

server = Server(ApiConfig(port=1337, cors_origins=["*"]), service)
server.start()  # Flask's built-in server on 0.0.0.0:1337
```

`Server.app()` returns the Flask application, which can be handed to any
WSGI server or exercised with Flask's test client.

## Error types

`uniswap_api.domain_errors` provides `DomainError` (an error with a code,
optional message and wrapped cause; `with_*` and `wrap` return copies,
`matches` compares codes) and `ErrorBundle`, which collects errors and
reads as one, joined by `"; "`. `uniswap_api.api_errors` provides
`ApiError` and `handle_error(err, path)`, which maps an exception to the
error body sent to clients.