from typing import Annotated

from fastapi import Depends, Request

from dbcontrol.core.registry import DatabaseRegistry
from dbcontrol.engines import DataAccessExecutor


def get_registry(request: Request) -> DatabaseRegistry:
    """The registry opened at startup (see main.lifespan)."""
    return request.app.state.registry


RegistryDep = Annotated[DatabaseRegistry, Depends(get_registry)]


def get_executor(registry: RegistryDep) -> DataAccessExecutor:
    return DataAccessExecutor(registry)


ExecutorDep = Annotated[DataAccessExecutor, Depends(get_executor)]
