from rifa_service.services.rifa.blueprints.raffles import raffles_blueprint
from rifa_service.services.rifa.blueprints.tokens import tokens_blueprint

__all__ = ["raffles_blueprint", "tokens_blueprint"]
