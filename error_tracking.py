"""Error tracking integration using Sentry.

``SentryClient`` is a page component that reports server-side errors through
``sentry_sdk`` and, when a browser DSN is configured, registers the Raven.js
reporting library on the page so that client-side errors are captured too.
Both sides share the user context recorded with ``set_user_context``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

import sentry_sdk
from pydantic import BaseModel, Field

import config
from client_script import ClientScript, Position
from constant import (
    DEFAULT_DATA_CALLBACK,
    JS_CLIENT_OBJECT,
    JS_INIT_SCRIPT_ID,
    JS_USER_SCRIPT_ID,
)
from utils import encode_js, merge_dicts

logger = logging.getLogger(__name__)


class RequestContext(BaseModel):
    """Session details of the request being served."""

    session_id: Optional[str] = None
    remote_addr: Optional[str] = None
    session: Dict[str, Any] = Field(default_factory=dict)


ContextProvider = Callable[[], Optional[RequestContext]]


def _no_request_context() -> Optional[RequestContext]:
    return None


class SentryClient:
    """Sentry reporting component for a single page run."""

    def __init__(
        self,
        dsn: Optional[str] = None,
        js_dsn: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
        js_options: Optional[Mapping[str, Any]] = None,
        project_url: str = "",
        enabled: bool = True,
        js_script_url: str = config.SENTRY_JS_SCRIPT_URL,
        client_script: Optional[ClientScript] = None,
        context_provider: ContextProvider = _no_request_context,
    ) -> None:
        self.dsn = dsn
        self.js_dsn = js_dsn
        self.options = dict(options or {})
        self.js_options = dict(js_options or {})
        self.project_url = project_url
        self.enabled = enabled
        self.js_script_url = js_script_url
        self.client_script = (
            client_script if client_script is not None else ClientScript()
        )
        self.context_provider = context_provider
        self._user_context: Dict[str, Any] = {}
        self._initialized = False

    @classmethod
    def from_config(cls, **overrides: Any) -> "SentryClient":
        """Build a client from the environment-driven ``config`` module."""
        settings: Dict[str, Any] = {
            "dsn": config.SENTRY_DSN,
            "js_dsn": config.SENTRY_JS_DSN,
            "options": config.SENTRY_OPTIONS,
            "js_options": config.SENTRY_JS_OPTIONS,
            "project_url": config.SENTRY_PROJECT_URL,
            "enabled": config.SENTRY_ENABLED,
            "js_script_url": config.SENTRY_JS_SCRIPT_URL,
        }
        settings.update(overrides)
        return cls(**settings)

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def user_context(self) -> Dict[str, Any]:
        return dict(self._user_context)

    def is_server_reporting_enabled(self) -> bool:
        return self.enabled and bool(self.dsn)

    def is_client_reporting_enabled(self) -> bool:
        return self.enabled and bool(self.js_dsn)

    def initialize(self) -> None:
        """Install server-side and browser-side reporting as configured."""
        if self._initialized:
            return

        if self.is_server_reporting_enabled():
            self._install_server_reporting()

        if self.is_client_reporting_enabled():
            self._install_client_reporting()

        self._initialized = True

    def capture_message(
        self, message: str, level: Optional[str] = None, scope: Any = None
    ) -> Optional[str]:
        """Send a message event and return its id, if one was recorded."""
        event_id = sentry_sdk.capture_message(message, level=level, scope=scope)
        if event_id:
            logger.info("Captured message", extra={"event_id": event_id})
        else:
            logger.debug("Message not sent")
        return event_id

    def capture_exception(
        self, exception: Optional[BaseException] = None, scope: Any = None
    ) -> Optional[str]:
        """Send an exception event and return its id, if one was recorded.

        Without ``exception`` the exception currently being handled is sent.
        """
        event_id = sentry_sdk.capture_exception(exception, scope=scope)
        if event_id:
            logger.info("Captured exception", extra={"event_id": event_id})
        else:
            logger.debug("Exception not sent")
        return event_id

    def get_last_event_id(self) -> Optional[str]:
        return sentry_sdk.last_event_id()

    @property
    def last_event_id(self) -> Optional[str]:
        return self.get_last_event_id()

    def get_last_event_url(self) -> str:
        """Link to the last captured event in the Sentry project."""
        return "{}/?query={}".format(
            self.project_url.rstrip("/"), self.get_last_event_id() or ""
        )

    def set_user_context(self, context: Mapping[str, Any]) -> None:
        """Record details about the current user on both reporting sides."""
        self._user_context = merge_dicts(self._user_context, context)

        if self.is_server_reporting_enabled():
            sentry_sdk.set_user(
                {**self._user_context, **self._initial_user_context()}
            )

        if self.is_client_reporting_enabled():
            user_context = encode_js(self._user_context, allow_raw=False)
            self.client_script.register_script(
                JS_USER_SCRIPT_ID,
                f"{JS_CLIENT_OBJECT}.setUserContext({user_context});",
            )

    def _install_server_reporting(self) -> None:
        options = {"dsn": self.dsn, **self.options}
        # The SDK client is process-wide; each init starts a new worker thread
        active = sentry_sdk.get_client()
        if active.is_active() and active.dsn == options["dsn"]:
            logger.debug("Server-side error reporting already installed")
        else:
            if active.is_active():
                active.close()
            sentry_sdk.init(**options)
            logger.info("Server-side error reporting enabled")
        sentry_sdk.set_user(self._initial_user_context())

    def _initial_user_context(self) -> Dict[str, Any]:
        request = self.context_provider()
        if request is None or not request.session_id:
            return {}
        user = dict(request.session)
        user["session_id"] = request.session_id
        if request.remote_addr:
            user["ip_address"] = request.remote_addr
        return user

    def _install_client_reporting(self) -> None:
        self.client_script.register_script_file(
            self.js_script_url,
            Position.HEAD,
            {"crossorigin": "anonymous"},
        )

        options = {**self.options, **self.js_options}
        if "dataCallback" not in options:
            options["dataCallback"] = DEFAULT_DATA_CALLBACK

        self.client_script.register_script(
            JS_INIT_SCRIPT_ID,
            f"{JS_CLIENT_OBJECT}.config({encode_js(self.js_dsn)}, "
            f"{encode_js(options)}).install();",
            Position.HEAD,
        )
        logger.info("Client-side error reporting enabled")


__all__ = ["ContextProvider", "RequestContext", "SentryClient"]
