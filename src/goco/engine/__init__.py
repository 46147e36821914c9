"""External game engine control."""

from .supervisor import ENGINE_FLAGS, EngineSupervisor, LaunchResult, LaunchStatus

__all__ = ["ENGINE_FLAGS", "EngineSupervisor", "LaunchResult", "LaunchStatus"]
