from fastapi import HTTPException, status


# domain errors raised inside the services, converted to HTTP errors by the routes


class SignatureVerificationError(Exception):
    """Webhook body or signature header could not be trusted"""


class NotificationDeliveryError(Exception):
    """Mail transport failed to deliver a notification"""


# HTTP errors


class WebhookError(HTTPException):
    def __init__(self, error_detail_message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail_message)


class ServerError(HTTPException):
    def __init__(self, error_detail_message: str):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error_detail_message)
