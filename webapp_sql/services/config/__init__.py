"""Configuration package (Facade).

Re-exports the public config types so the rest of the codebase can import from a
single, stable path:

	from webapp_sql.services.config import AzureConfig, WorkflowConfig

- ``AzureConfig``: service principal credentials and subscription (environment).
- ``WorkflowConfig``: region, resource names and SQL admin credentials for one run.
"""

from webapp_sql.services.config.azure_config import AzureConfig
from webapp_sql.services.config.workflow_config import WorkflowConfig

__all__ = ["AzureConfig", "WorkflowConfig"]
