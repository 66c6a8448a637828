from parley.resources.database import ScriptDatabase

__all__ = ["ScriptDatabase"]
