from fastapi import APIRouter

from dbcontrol.api.routes import records, sql, tables, triggers, utils

api_router = APIRouter()
api_router.include_router(tables.router)
api_router.include_router(records.router)
api_router.include_router(triggers.router)
api_router.include_router(sql.router)
api_router.include_router(utils.router)
