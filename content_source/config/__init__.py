from .loader import load_config
from .models import ContentSourcesConfig, SourceConfig, UrlRuleConfig

__all__ = [
    "ContentSourcesConfig",
    "SourceConfig",
    "UrlRuleConfig",
    "load_config",
]
