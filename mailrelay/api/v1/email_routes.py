"""Routes for sending email and reading the send history."""

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from mailrelay.api.multipart import parse_submission
from mailrelay.core.config import Settings
from mailrelay.schemas import SendEmailResponse, SendEmailResult, SendRecordResponse
from mailrelay.services import EmailService

router = APIRouter(tags=["email"])


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post("/send-email", response_model=SendEmailResponse)
async def send_email(
    request: Request,
    service: EmailService = Depends(get_email_service),
    config: Settings = Depends(get_app_settings),
):
    """Relay a multipart submission through the sender's SMTP account."""

    submission = await parse_submission(request, max_file_size=config.MAX_ATTACHMENT_SIZE)
    outcome = await run_in_threadpool(
        service.send_email, submission.fields, submission.attachments
    )
    return SendEmailResponse(
        message="Email sent successfully",
        result=SendEmailResult(message_id=outcome.message_id),
    )


@router.get("/emails", response_model=list[SendRecordResponse])
def list_emails(service: EmailService = Depends(get_email_service)):
    return [SendRecordResponse.from_record(record) for record in service.list_sent()]


@router.get("/emails/{record_id}", response_model=SendRecordResponse)
def get_email(record_id: int, service: EmailService = Depends(get_email_service)):
    return SendRecordResponse.from_record(service.get_sent(record_id))


__all__ = ["router"]
