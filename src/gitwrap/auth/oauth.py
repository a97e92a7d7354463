"""GitHub OAuth2 authorization-code flow with a local callback listener."""

import threading
import webbrowser
from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Callable, Optional
from urllib.parse import urlencode, urlsplit

import requests
from pydantic import ValidationError

from ..models.types import AccessToken
from ..utils.config import OAuthConfig
from ..utils.errors import ConfigurationError, ListenerError, TokenExchangeError
from ..utils.logger import Logger

Exchange = Callable[[str, OAuthConfig, str], AccessToken]


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    scope: str = "repo",
    authorize_url: str = "https://github.com/login/oauth/authorize"
) -> str:
    """Build the URL the user opens to grant access."""
    query = urlencode({
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "scope": scope,
    })
    return f"{authorize_url}?{query}"


def extract_code(query: Optional[str]) -> Optional[str]:
    """Return the value of the first ``code=`` parameter in a raw query string.

    Splitting is plain ``&`` then ``=``: values are not URL-decoded and a
    value containing either character is cut short.
    """
    if not query:
        return None
    for param in query.split("&"):
        if param.startswith("code="):
            return param.split("=")[1] or None
    return None


def exchange_code_for_token(code: str, config: OAuthConfig, redirect_uri: str) -> AccessToken:
    """Exchange an authorization code for an access token with one POST."""
    try:
        response = requests.post(
            config.token_url,
            data={
                "client_id": config.client_id,
                "client_secret": config.client_secret,
                "code": code,
                "redirect_uri": redirect_uri,
            },
            headers={"Accept": "application/json"},
            timeout=config.request_timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        raise TokenExchangeError(f"Error exchanging code for token: {e}", e)
    except ValueError as e:
        raise TokenExchangeError(f"Token endpoint returned invalid JSON: {e}", e)

    if not isinstance(payload, dict) or not payload.get("access_token"):
        reason = "no access_token in response"
        if isinstance(payload, dict):
            reason = payload.get("error_description") or payload.get("error") or reason
        raise TokenExchangeError(f"Error exchanging code for token: {reason}")

    try:
        return AccessToken(
            access_token=payload["access_token"],
            token_type=payload.get("token_type"),
            scope=payload.get("scope"),
        )
    except ValidationError as e:
        raise TokenExchangeError(f"Malformed token response: {e}", e)


class _CallbackServer(HTTPServer):
    """Single-use listener; ``result`` completes on the first good callback."""

    def __init__(self, address, callback_path: str):
        super().__init__(address, _CallbackHandler)
        self.callback_path = callback_path
        self.exchange: Callable[[str], AccessToken] = lambda code: None
        self.result: Future = Future()


class _CallbackHandler(BaseHTTPRequestHandler):
    server: _CallbackServer

    def do_GET(self):
        parsed = urlsplit(self.path)
        if parsed.path != self.server.callback_path:
            self._respond(404, "Not found")
            return
        if self.server.result.done():
            self._respond(410, "Authorization already completed")
            return

        code = extract_code(parsed.query)
        if code is None:
            self._respond(400, "Missing authorization code")
            return

        try:
            token = self.server.exchange(code)
        except Exception as e:
            # Handed to the waiting thread, which re-raises it
            try:
                self._respond(502, f"Token exchange failed: {e}")
            finally:
                self.server.result.set_exception(e)
            return

        # Response is flushed before the waiting thread is released
        try:
            self._respond(200, f"OAuth2 token: {token.access_token}")
        finally:
            self.server.result.set_result(token)

    def _respond(self, status: int, body: str):
        data = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)
        self.wfile.flush()

    def log_message(self, format, *args):
        Logger.debug("Callback listener: " + format % args)


class TokenAcquirer:
    """Runs the browser-based authorization flow and returns one access token."""

    def __init__(
        self,
        config: OAuthConfig,
        browser: Optional[Callable[[str], Any]] = None,
        exchange: Optional[Exchange] = None
    ):
        self.config = config
        self.browser = browser or webbrowser.open
        self.exchange = exchange or exchange_code_for_token

    def acquire(self) -> AccessToken:
        """Listen for the callback, open the browser and wait for the token.

        Raises:
            ConfigurationError: client id or secret is missing.
            ListenerError: the port cannot be bound or no callback arrived in time.
            TokenExchangeError: the code could not be exchanged.
        """
        config = self.config
        if not config.client_id or not config.client_secret:
            raise ConfigurationError(
                "GitHub client id and client secret are required "
                "(set GITHUB_CLIENT_ID and GITHUB_CLIENT_SECRET)"
            )

        try:
            server = _CallbackServer(
                (config.callback_host, config.callback_port),
                config.callback_path
            )
        except OSError as e:
            raise ListenerError(
                f"Could not listen on {config.callback_host}:{config.callback_port}: {e}", e
            )

        port = server.server_address[1]
        redirect_uri = f"http://{config.callback_host}:{port}{config.callback_path}"
        server.exchange = lambda code: self.exchange(code, config, redirect_uri)

        authorization_url = build_authorization_url(
            config.client_id, redirect_uri, config.scope, config.authorize_url
        )
        Logger.print("Open this URL in a browser to authorize the application:")
        Logger.print(authorization_url)

        thread = threading.Thread(
            target=server.serve_forever,
            name="gitwrap-oauth-callback",
            daemon=True
        )
        thread.start()
        Logger.debug(f"Waiting for OAuth callback on {redirect_uri}")

        try:
            if config.open_browser:
                try:
                    self.browser(authorization_url)
                except webbrowser.Error as e:
                    Logger.warning(f"Could not open a browser: {e}")
            return server.result.result(timeout=config.timeout)
        except FutureTimeoutError as e:
            raise ListenerError(
                f"No OAuth callback received within {config.timeout:g} seconds", e
            )
        finally:
            # shutdown() returns only after an in-flight request has finished
            server.shutdown()
            server.server_close()
            thread.join()
