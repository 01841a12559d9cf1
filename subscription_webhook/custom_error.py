from fastapi import HTTPException, status


class WebhookAuthenticationError(HTTPException):
    """Signature, timestamp or payload could not be trusted - the event is never processed"""

    def __init__(self, reason: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Webhook Error: {reason}")


class MissingSubscriptionError(HTTPException):
    def __init__(self):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="No subscription ID")


class SubscriptionUpdateError(HTTPException):
    """Stripe rejected the metadata update - Stripe redelivers the event because it is not acknowledged"""

    def __init__(self, reason: str):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Update Error: {reason}")


class WebhookProcessingError(HTTPException):
    def __init__(self, reason: str):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Webhook Handler Error: {reason}")
