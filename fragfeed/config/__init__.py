from fragfeed.config.settings import settings

__all__ = ["settings"]
