"""
test_dashboard_responses.py — Tests for the response dispatcher.

classify_error is pure, so the status/body mapping is checked without HTTP;
dashboard_response is checked on the JSONResponse it builds.

Called by: pytest
Depends on: app/routers/dashboard_responses.py
"""

import json

from loguru import logger
from sqlalchemy.exc import NoResultFound, OperationalError

from app.routers.dashboard_responses import classify_error, dashboard_response, error_response
from app.schemas.responses import EntityResponse, ListResponse
from app.services.errors import NotAuthorizedError, RecordNotFoundError, TemplateValidationError


class TestClassifyError:
    def test_record_not_found_is_404_with_message(self):
        status, body = classify_error(RecordNotFoundError())
        assert status == 404
        assert body.errors == ["record not found"]

    def test_sqlalchemy_no_result_is_404(self):
        status, _ = classify_error(NoResultFound("No row was found"))
        assert status == 404

    def test_not_authorized_is_masked_403(self):
        status, body = classify_error(NotAuthorizedError("user 3 does not own template 9"))
        assert status == 403
        assert body.errors == ["not authorized"]

    def test_validation_error_is_400(self):
        status, body = classify_error(TemplateValidationError("invalid template ID"))
        assert status == 400
        assert body.errors == ["invalid template ID"]

    def test_unclassified_error_is_400_and_logged(self):
        messages = []
        sink = logger.add(lambda m: messages.append(str(m)), format="{level} {message}")
        try:
            status, body = classify_error(OperationalError("SELECT 1", {}, Exception("db down")))
        finally:
            logger.remove(sink)
        assert status == 400
        assert "db down" in body.errors[0]
        assert any(m.startswith("ERROR") and "db down" in m for m in messages)

    def test_not_found_and_forbidden_are_not_logged(self):
        messages = []
        sink = logger.add(lambda m: messages.append(str(m)), format="{message}")
        try:
            classify_error(RecordNotFoundError())
            classify_error(NotAuthorizedError())
        finally:
            logger.remove(sink)
        assert messages == []

    def test_no_error_falls_back_to_500(self):
        status, body = classify_error(None)
        assert status == 500
        assert body.errors == ["internal server error"]


class TestDispatch:
    def test_success_envelope(self):
        resp = dashboard_response(ListResponse[int](data=[1, 2]))
        assert resp.status_code == 200
        assert resp.media_type == "application/json"
        assert json.loads(resp.body) == {"data": [1, 2]}

    def test_entity_envelope(self):
        resp = dashboard_response(EntityResponse[str](data="x"))
        assert json.loads(resp.body) == {"data": "x"}

    def test_error_wins_over_envelope(self):
        resp = dashboard_response(ListResponse[int](data=[1]), RecordNotFoundError())
        assert resp.status_code == 404
        body = json.loads(resp.body)
        assert body == {"errors": ["record not found"]}
        assert "data" not in body

    def test_error_response_shape(self):
        resp = error_response(NotAuthorizedError("secret detail"))
        assert resp.status_code == 403
        assert json.loads(resp.body) == {"errors": ["not authorized"]}
