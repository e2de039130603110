from __future__ import annotations

import logging
from typing import Any, Optional

from azure.mgmt.web.models import AppServicePlan, Site, SiteConfig, SkuDescription

from webapp_sql.models.web_app import AppServicePlanItem, AppSetting, WebAppItem
from webapp_sql.services.lro import wait_until_completed


logger = logging.getLogger(__name__)


class WebAppServiceError(RuntimeError):
    pass


class WebAppService:
    def __init__(self, client: Any) -> None:
        self._client = client

    async def create_app_service_plan(
        self,
        *,
        resource_group_name: str,
        plan_name: str,
        region: str,
        sku_name: str = "S1",
    ) -> AppServicePlanItem:
        try:
            plan = await wait_until_completed(
                self._client.app_service_plans.begin_create_or_update(
                    resource_group_name,
                    plan_name,
                    AppServicePlan(location=region, sku=SkuDescription(name=sku_name)),
                ),
                description=f"App Service plan {plan_name}",
            )
            return AppServicePlanItem.from_azure(plan)
        except Exception as exc:
            logger.exception("Web create_app_service_plan failed (plan=%s)", plan_name)
            raise WebAppServiceError(f"Failed to create App Service plan (plan={plan_name})") from exc

    async def create_web_app(
        self,
        *,
        resource_group_name: str,
        app_name: str,
        region: str,
        app_settings: list[AppSetting],
        server_farm_id: Optional[str] = None,
        net_framework_version: Optional[str] = None,
        php_version: Optional[str] = None,
    ) -> WebAppItem:
        """Create the site with the given app settings and wait until it is provisioned.

        The returned item carries the outbound IP addresses Azure assigned to the site.
        """

        try:
            site_config = SiteConfig(
                net_framework_version=net_framework_version,
                php_version=php_version,
                app_settings=[setting.to_azure() for setting in app_settings],
            )
            site = await wait_until_completed(
                self._client.web_apps.begin_create_or_update(
                    resource_group_name,
                    app_name,
                    Site(location=region, server_farm_id=server_farm_id, site_config=site_config),
                ),
                description=f"web app {app_name}",
            )
            return WebAppItem.from_azure(site)
        except Exception as exc:
            logger.exception("Web create_web_app failed (app=%s)", app_name)
            raise WebAppServiceError(f"Failed to create web app (app={app_name})") from exc
