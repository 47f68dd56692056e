"""Demo data generators."""

from mhimmo.generators.rental import (
    PopulationResult,
    PropertyGenerator,
    UserGenerator,
    populate_store,
)

__all__ = ["PopulationResult", "PropertyGenerator", "UserGenerator", "populate_store"]
