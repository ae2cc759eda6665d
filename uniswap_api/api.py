"""HTTP API serving Uniswap V2 swap estimates."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request

from .api_errors import BAD_REQUEST, INTERNAL_ERROR, VALIDATION_ERROR, handle_error
from .uniswap import UniswapService

logger = logging.getLogger(__name__)

DEFAULT_CORS_METHODS = ("HEAD", "GET", "POST", "PUT", "DELETE", "PATCH")
CORS_MAX_AGE = 1000


@dataclass
class ApiConfig:
    """Settings of the HTTP server."""

    log_level: str = ""
    port: int = 0
    domain: str = ""
    metrics_namespace: str = ""
    cors_origins: list[str] = field(default_factory=list)
    cors_methods: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EstimateResponse:
    """Body of a successful estimate."""

    amount: str

    def to_dict(self) -> dict[str, str]:
        return {"amount": self.amount}


def parse_amount(value: str) -> int:
    """Parse an integer with an optional sign and base prefix; raise ``ValueError`` otherwise."""
    if not value or not value.isascii() or value != value.strip():
        raise ValueError(f"invalid amount: {value!r}")
    sign, digits = ("", value) if value[0] not in "+-" else (value[0], value[1:])
    if len(digits) > 1 and digits[0] == "0" and (digits[1].isdigit() or digits[1] == "_"):
        digits = "0o" + digits[1:]
    try:
        return int(sign + digits, 0)
    except ValueError as exc:
        raise ValueError(f"invalid amount: {value!r}") from exc


@dataclass(frozen=True)
class _CorsPolicy:
    origins: tuple[str, ...]
    methods: tuple[str, ...]

    def _origin_allowed(self, origin: str) -> bool:
        if not self.origins or "*" in self.origins:
            return True
        origin = origin.lower()
        for pattern in map(str.lower, self.origins):
            prefix, star, suffix = pattern.partition("*")
            if not star and pattern == origin:
                return True
            if star and len(origin) >= len(pattern) - 1 and origin.startswith(prefix) and origin.endswith(suffix):
                return True
        return False

    def _allowed(self, origin: str, method: str) -> bool:
        method = method.upper()
        return bool(origin) and self._origin_allowed(origin) and bool(self.methods) and (
            method == "OPTIONS" or method in self.methods
        )

    def _allow_origin(self, origin: str) -> str:
        return "*" if not self.origins or "*" in self.origins else origin

    def preflight_headers(self, origin: str, method: str, req_headers: str) -> list[tuple[str, str]]:
        headers = [("Vary", "Origin"), ("Vary", "Access-Control-Request-Method"),
                   ("Vary", "Access-Control-Request-Headers")]
        if not self._allowed(origin, method):
            return headers
        headers += [("Access-Control-Allow-Origin", self._allow_origin(origin)),
                    ("Access-Control-Allow-Methods", method.upper())]
        if req_headers:
            headers.append(("Access-Control-Allow-Headers", req_headers))
        return headers + [("Access-Control-Allow-Credentials", "true"),
                          ("Access-Control-Max-Age", str(CORS_MAX_AGE))]

    def actual_headers(self, origin: str, method: str) -> list[tuple[str, str]]:
        headers = [("Vary", "Origin")]
        if self._allowed(origin, method):
            headers += [("Access-Control-Allow-Origin", self._allow_origin(origin)),
                        ("Access-Control-Allow-Credentials", "true")]
        return headers


def _apply_headers(response: Response, headers: list[tuple[str, str]]) -> None:
    for name, value in headers:
        if name == "Vary":
            response.headers.add(name, value)
        else:
            response.headers[name] = value


def _error_response(err: BaseException):
    api_err = handle_error(err, request.path)
    return jsonify(api_err.to_dict()), api_err.status


def create_app(config: ApiConfig, service: UniswapService) -> Flask:
    """Build the Flask application serving the estimate endpoint."""
    app = Flask(__name__)
    app.json.sort_keys = False
    cors = _CorsPolicy(
        tuple(config.cors_origins),
        tuple(m.upper() for m in (config.cors_methods or DEFAULT_CORS_METHODS)),
    )

    @app.before_request
    def _before():
        g.started = time.perf_counter()
        logger.debug("request ip=%s method=%s path=%s", request.remote_addr, request.method, request.path)
        origin = request.headers.get("Origin", "")
        requested_method = request.headers.get("Access-Control-Request-Method", "")
        if request.method == "OPTIONS" and requested_method:
            response = Response(status=HTTPStatus.NO_CONTENT)
            requested_headers = request.headers.get("Access-Control-Request-Headers", "")
            _apply_headers(response, cors.preflight_headers(origin, requested_method, requested_headers))
            return response
        g.cors_headers = cors.actual_headers(origin, request.method)
        return None

    @app.after_request
    def _after(response: Response) -> Response:
        _apply_headers(response, g.pop("cors_headers", []))
        latency = time.perf_counter() - g.get("started", time.perf_counter())
        logger.debug(
            "response ip=%s method=%s path=%s code=%s latency=%.6fs",
            request.remote_addr, request.method, request.path, response.status_code, latency,
        )
        return response

    @app.errorhandler(Exception)
    def _recover(err: Exception):
        # Routing errors (404, 405, ...) carry their own response.
        if isinstance(getattr(err, "code", None), int) and callable(getattr(err, "get_response", None)):
            return err
        logger.error("recovery from panic: %s", err, exc_info=err)
        return _error_response(INTERNAL_ERROR)

    @app.get("/estimate")
    def estimate():
        params = {}
        for name in ("pool", "src", "dst", "src_amount"):
            params[name] = request.args.get(name, "")
            if not params[name]:
                return _error_response(VALIDATION_ERROR.with_message(f"{name} required field"))

        amount = parse_amount(params["src_amount"])
        try:
            output = service.get_output_amount(params["src"], params["dst"], params["pool"], amount)
        except ZeroDivisionError:
            raise
        except Exception as exc:
            return _error_response(BAD_REQUEST.with_message(str(exc)))
        return jsonify(EstimateResponse(amount=str(output)).to_dict()), HTTPStatus.OK

    return app


class Server:
    """The API server: configuration, service and the application built from them."""

    def __init__(self, config: ApiConfig, service: UniswapService) -> None:
        self.config = config
        self.service = service
        self._app = create_app(config, service)

    def app(self) -> Flask:
        return self._app

    def start(self) -> None:
        """Serve on the configured port on every interface until stopped."""
        logger.info("Starting api server on port %d", self.config.port)
        self._app.run(host="0.0.0.0", port=self.config.port)