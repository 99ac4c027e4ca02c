from fastapi import APIRouter, Depends, Request, Response

from barometer.repositories import ObservationRepository

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="", tags=["observations"])


def get_repository(request: Request) -> ObservationRepository:
    """The repository loaded at startup (see lifespan in barometer.main)."""
    return request.app.state.repository


@router.get("/")
def list_observations(repo: ObservationRepository = Depends(get_repository)):
    """
    Return every observation in lower-camel form:
      [{"id": 1, "nuts1": "AT13", "districtCode": 91900, "refYear": 1872,
        "refDate": 187205, "p": "990.9", "p_max": "1003.2", "p_min": "981.2"}, ...]

    204 with an empty body when nothing is loaded.
    """
    rows = [o.to_dict() for o in repo.all()]
    if not rows:
        return Response(status_code=204)
    return rows
