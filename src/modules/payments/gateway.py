"""Braintree gateway construction.

The gateway is built from an explicit ``BraintreeSettings`` object and
handed to whatever needs it; nothing here reads the environment at
import time.
"""

from __future__ import annotations

from typing import Literal

import braintree
import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger(__name__)

ENVIRONMENTS = {
    "sandbox": braintree.Environment.Sandbox,
    "production": braintree.Environment.Production,
}


class BraintreeSettings(BaseModel):
    """Immutable Braintree credentials."""

    model_config = ConfigDict(frozen=True)

    environment: Literal["sandbox", "production"] = "sandbox"
    merchant_id: str = Field(min_length=1)
    public_key: str = Field(min_length=1)
    private_key: str = Field(min_length=1, repr=False)

    @classmethod
    def from_django_settings(cls) -> BraintreeSettings:
        """Read ``settings.BRAINTREE`` (populated from ``BRAINTREE_*`` env vars)."""
        from django.conf import settings

        conf = settings.BRAINTREE
        return cls(
            environment=conf["ENVIRONMENT"],
            merchant_id=conf["MERCHANT_ID"],
            public_key=conf["PUBLIC_KEY"],
            private_key=conf["PRIVATE_KEY"],
        )


def build_gateway(settings: BraintreeSettings) -> braintree.BraintreeGateway:
    gateway = braintree.BraintreeGateway(
        braintree.Configuration(
            environment=ENVIRONMENTS[settings.environment],
            merchant_id=settings.merchant_id,
            public_key=settings.public_key,
            private_key=settings.private_key,
        )
    )
    logger.info(
        "payments.gateway_built",
        environment=settings.environment,
        merchant_id=settings.merchant_id,
    )
    return gateway
