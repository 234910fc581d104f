from fastapi import Request

from app.services.mail_dispatcher import MailDispatcher
from app.services.upload_service import UploadHandler


def get_upload_handler(request: Request) -> UploadHandler:
    """Upload handler created once in the application lifespan."""
    return request.app.state.upload_handler


def get_mail_dispatcher(request: Request) -> MailDispatcher:
    """
    Mail dispatcher bound to the process-wide mail client.

    Usage:
        @router.post("/contact")
        async def submit(dispatcher: MailDispatcher = Depends(get_mail_dispatcher)):
            await dispatcher.dispatch(mail)
    """
    return request.app.state.mail_dispatcher
