"""Webhooks API (``/api/webhooks``).

Usage:
    hook = client.webhooks.create(name="ci", url="https://ci.example.com/hook", project="my-project")
    for delivery in client.webhooks.deliveries().webhook(hook["webhook"]["key"]).all():
        print(delivery["at"], delivery["httpStatus"])
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class Webhook(TypedDict, total=False):
    key: str
    name: str
    url: str
    hasSecret: bool
    latestDelivery: dict


class CreateWebhookResponse(TypedDict):
    webhook: Webhook


class ListWebhooksResponse(TypedDict):
    webhooks: list[Webhook]


class Delivery(TypedDict, total=False):
    id: str
    componentKey: str
    ceTaskId: str
    name: str
    url: str
    at: str
    success: bool
    httpStatus: int
    durationMs: int
    payload: str


class DeliveriesResponse(TypedDict):
    deliveries: list[Delivery]
    paging: dict


class DeliveriesBuilder(PaginatedBuilder[DeliveriesResponse, Delivery]):
    items_key = "deliveries"

    def ce_task_id(self, task_id: str) -> "DeliveriesBuilder":
        return self._set("ceTaskId", task_id)

    def component_key(self, component_key: str) -> "DeliveriesBuilder":
        return self._set("componentKey", component_key)

    def webhook(self, webhook_key: str) -> "DeliveriesBuilder":
        return self._set("webhook", webhook_key)


def _required(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", field)
    return value.strip()


def _optional(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


class WebhooksClient(BaseClient):

    def create(
        self,
        name: str,
        url: str,
        *,
        organization: str | None = None,
        project: str | None = None,
        secret: str | None = None,
    ) -> CreateWebhookResponse:
        """Create a webhook for the organization, or for one *project*.

        Text values are trimmed and blank optional ones are left out.
        """
        return self._post(
            "/api/webhooks/create",
            {
                "name": _required(name, "name"),
                "organization": _required(organization or self.organization, "organization"),
                "url": _required(url, "url"),
                "project": _optional(project),
                "secret": _optional(secret),
            },
        )

    def update(self, webhook: str, name: str, url: str, secret: str | None = None) -> None:
        """Update a webhook; a blank *secret* removes the existing one."""
        data = {
            "webhook": _required(webhook, "webhook"),
            "name": _required(name, "name"),
            "url": _required(url, "url"),
        }
        if secret is not None:
            data["secret"] = secret.strip()
        self._post("/api/webhooks/update", data)

    def delete(self, webhook: str) -> None:
        self._post("/api/webhooks/delete", {"webhook": _required(webhook, "webhook")})

    def list(self, organization: str | None = None, project: str | None = None) -> ListWebhooksResponse:
        return self._get(
            "/api/webhooks/list",
            {
                "organization": _required(organization or self.organization, "organization"),
                "project": _optional(project),
            },
        )

    def deliveries(self) -> DeliveriesBuilder:
        return DeliveriesBuilder(lambda params: self._get("/api/webhooks/deliveries", params))

    def delivery(self, delivery_id: str) -> dict:
        """One delivery, including the payload that was sent."""
        return self._get("/api/webhooks/delivery", {"deliveryId": _required(delivery_id, "deliveryId")})
