"""Exception hierarchy for planner generation."""


class PlannerError(Exception):
    """Base class for every error raised by bujo_planner."""


class ConfigError(PlannerError):
    """A configuration file or profile name could not be understood."""


class GenerationError(PlannerError):
    """The generation pipeline failed; no document was produced."""
