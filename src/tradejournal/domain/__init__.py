"""Domain layer for tradejournal application."""

# Services are imported lazily: the database layer imports domain.entities,
# and the services import the database layer.
_SERVICES = {
    "AccountService": "tradejournal.domain.account",
    "TradeService": "tradejournal.domain.trade",
    "TradeImportService": "tradejournal.domain.trade_import",
    "FolderWatcherService": "tradejournal.domain.folder_watcher",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
