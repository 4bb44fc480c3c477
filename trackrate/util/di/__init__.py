from trackrate.util.di.scope import Scope

__all__ = ["Scope"]
