from fairshare.handlers.basic import basic_router
from fairshare.handlers.participants import participants_router
from fairshare.handlers.payments import payments_router
from fairshare.handlers.summary import summary_router

__all__ = ["basic_router", "participants_router", "payments_router", "summary_router"]
