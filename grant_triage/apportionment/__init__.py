from .costs import Apportionment, apportion

__all__ = ["Apportionment", "apportion"]
