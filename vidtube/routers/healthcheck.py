from fastapi import APIRouter

from vidtube.responses import respond
from vidtube.services import healthcheck as healthcheck_service

router = APIRouter(prefix="/api/v1/healthcheck", tags=["healthcheck"])


@router.get("")
def healthcheck():
    return respond(200, {}, "OK")


@router.get("/db")
def database_healthcheck():
    return respond(200, healthcheck_service.check_database(), "Database connection OK")
