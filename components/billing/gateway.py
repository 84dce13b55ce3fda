"""Mercado Pago checkout preference client."""

import json
import logging
from typing import Optional

import httpx

from components.account.policy import CHECKOUT_ITEMS, Plan, normalize_plan
from components.billing.schemas import CheckoutPreference
from components.core.config import get_settings
from components.core.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)
settings = get_settings()


class MercadoPagoGateway:
    """Creates hosted checkout sessions for paid plan upgrades."""

    PREFERENCES_PATH = "/checkout/preferences"

    def __init__(
        self,
        access_token: Optional[str] = None,
        api_url: Optional[str] = None,
        app_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token if access_token is not None else settings.MERCADO_PAGO_ACCESS_TOKEN
        self.api_url = (api_url or settings.MERCADO_PAGO_API_URL).rstrip("/")
        self.app_url = (app_url or settings.APP_URL).rstrip("/")
        self.transport = transport

    def build_preference(self, plan: Plan, payer_email: str, payer_name: str) -> dict:
        """Preference payload for a paid plan."""
        item = CHECKOUT_ITEMS[plan]
        return {
            "items": [
                {
                    "title": item["title"],
                    "quantity": 1,
                    "unit_price": float(item["price"]),
                    "currency_id": settings.CURRENCY_ID,
                }
            ],
            "payer": {"email": payer_email, "name": payer_name},
            "back_urls": {
                "success": f"{self.app_url}/?payment=success&plan={plan.value}",
                "failure": f"{self.app_url}/?payment=failure",
                "pending": f"{self.app_url}/?payment=pending",
            },
            "auto_return": "approved",
            "external_reference": json.dumps({"plan": plan.value, "user_email": payer_email}),
            "notification_url": f"{self.app_url}/webhook/mercadopago",
        }

    async def create_preference(self, plan: str, payer_email: str, payer_name: str) -> CheckoutPreference:
        """
        Create a checkout preference and return where to send the payer.

        Fails without retrying when the access token is missing, the plan is
        not a paid one, or the provider answers with a non-success status.
        """
        if not self.access_token:
            logger.error("MERCADO_PAGO_ACCESS_TOKEN not configured; cannot create checkout")
            raise PaymentGatewayError("Mercado Pago access token is not configured")

        selected = normalize_plan(plan)
        if selected.value != plan or selected not in CHECKOUT_ITEMS:
            raise PaymentGatewayError(f"Invalid plan: {plan}")

        payload = self.build_preference(selected, payer_email, payer_name)
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=30.0, transport=self.transport) as client:
                response = await client.post(
                    f"{self.api_url}{self.PREFERENCES_PATH}",
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error(f"Mercado Pago request failed: {e}")
            raise PaymentGatewayError(f"Error creating payment: {e}")

        if not response.is_success:
            logger.error(f"Mercado Pago preference failed: {response.status_code} {response.text}")
            raise PaymentGatewayError(f"Error creating payment: {response.text}")

        try:
            data = response.json()
            checkout_url, preference_id = data["init_point"], str(data["id"])
        except (ValueError, KeyError, TypeError):
            logger.error(f"Mercado Pago preference response is missing init_point or id: {response.text}")
            raise PaymentGatewayError("Payment provider returned an incomplete checkout preference")

        logger.info(f"Checkout preference {preference_id} created for {selected.value}")
        return CheckoutPreference(checkout_url=checkout_url, preference_id=preference_id)
