"""Entry point for the mail relay service."""

import logging

from fastapi import FastAPI

from mailrelay.api import email_router
from mailrelay.core.config import Settings, settings
from mailrelay.core.error_handlers import register_exception_handlers
from mailrelay.repository import MailRelay, SendRecordRepository, SmtpMailRelay
from mailrelay.services import EmailService


def create_app(
    *,
    config: Settings | None = None,
    relay: MailRelay | None = None,
    records: SendRecordRepository | None = None,
) -> FastAPI:
    """Build the application with one send-record store for its lifetime."""

    config = config or settings
    logging.getLogger("mailrelay").setLevel(config.LOG_LEVEL)

    app = FastAPI(title=config.PROJECT_NAME)
    app.state.settings = config
    app.state.email_service = EmailService(
        relay=relay or SmtpMailRelay(config),
        records=records if records is not None else SendRecordRepository(),
    )

    register_exception_handlers(app)

    app.include_router(email_router, prefix=config.API_PREFIX)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()

__all__ = ["app", "create_app"]
