"""Azure App Service sample: manage a web app with a SQL database connection.

- Create a SQL database in a new SQL server
- Create a web app (Project Nami, WordPress's SQL Server variant) whose app
  settings connect it to the SQL database
- Update the SQL server's firewall rules to allow the web app to access it
- Clean up

Credentials come from CLIENT_ID, CLIENT_SECRET, TENANT_ID and SUBSCRIPTION_ID.
"""

import asyncio
import logging
from typing import Callable, Optional

from webapp_sql.services.config import AzureConfig, WorkflowConfig
from webapp_sql.services.dependencies import (
    get_azure_clients,
    get_http_session,
    get_web_app_sql_setup_service,
)


logger = logging.getLogger(__name__)


def _ensure_logging() -> None:
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    else:
        root.setLevel(logging.INFO)
        for handler in root.handlers:
            handler.setFormatter(formatter)
    # The Azure SDK logs every HTTP request at INFO.
    logging.getLogger("azure").setLevel(logging.WARNING)


async def run_sample(
    *,
    workflow_config: Optional[WorkflowConfig] = None,
    prompt: Optional[Callable[[str], object]] = input,
) -> bool:
    """Authenticate from the environment and run the provisioning workflow.

    Returns the workflow's result, or False when configuration or client setup
    failed. Never raises.
    """

    try:
        azure_config = AzureConfig.from_env()
        config = workflow_config or WorkflowConfig.generate()

        async with get_http_session() as session:
            async with get_azure_clients(azure_config, session=session) as clients:
                logger.info("Selected subscription: %s", azure_config.subscription_resource_id)
                service = get_web_app_sql_setup_service(clients, config=config, prompt=prompt)
                return await service.run()
    except Exception:
        logger.exception("Sample failed")
        return False


def main() -> None:
    _ensure_logging()
    asyncio.run(run_sample())


if __name__ == "__main__":
    main()
