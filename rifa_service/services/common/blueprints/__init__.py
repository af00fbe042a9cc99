from rifa_service.services.common.blueprints.admin import admin_blueprint
from rifa_service.services.common.blueprints.metrics import metrics_blueprint

__all__ = ["admin_blueprint", "metrics_blueprint"]
