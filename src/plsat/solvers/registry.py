"""
Solver registry: maps the names accepted by ``solver.name`` and
``--algorithm`` to solver classes.
"""

import inspect
import logging
from collections.abc import Callable

from ..exceptions import ConfigurationError
from .base import SolverBase
from .config import get_config

# Set up logging
logger = logging.getLogger(__name__)


class SolverRegistry:
    """
    Registered solver classes by name.

    When no name is given, the solver named by the ``solver.name``
    configuration key is used.
    """

    _registry: dict[str, type[SolverBase]] = {}

    @classmethod
    def register(cls, name: str, solver_cls: type[SolverBase]) -> None:
        """
        Register a solver class and give it ``name`` as its ``solver_name``.

        Raises:
            TypeError: If ``solver_cls`` is not a SolverBase subclass
        """
        if not inspect.isclass(solver_cls) or not issubclass(solver_cls, SolverBase):
            raise TypeError(
                f"Solver class {getattr(solver_cls, '__name__', solver_cls)} must inherit from SolverBase"
            )

        existing = cls._registry.get(name)
        if existing is not None and existing is not solver_cls:
            logger.warning(f"Overriding existing solver registration for '{name}'")

        cls._registry[name] = solver_cls
        solver_cls.solver_name = name

    @classmethod
    def get(cls, name: str | None = None) -> type[SolverBase]:
        """
        Look up a solver class.

        Args:
            name: Registered name, or None for the configured ``solver.name``

        Raises:
            ConfigurationError: If no solver is registered under the name
        """
        if name is None:
            name = get_config().get("solver.name")

        if name not in cls._registry:
            available = ", ".join(cls.list_solvers())
            raise ConfigurationError(
                f"No solver registered with name '{name}' (available: {available})"
            )
        return cls._registry[name]

    @classmethod
    def list_solvers(cls) -> list[str]:
        return list(cls._registry.keys())

    @classmethod
    def create(cls, name: str | None = None, **kwargs) -> SolverBase:
        """Instantiate the named (or configured) solver with ``kwargs``."""
        return cls.get(name)(**kwargs)


def register_solver(name: str) -> Callable[[type[SolverBase]], type[SolverBase]]:
    """Class decorator registering a solver under ``name``."""

    def decorator(solver_cls: type[SolverBase]) -> type[SolverBase]:
        SolverRegistry.register(name, solver_cls)
        return solver_cls

    return decorator
