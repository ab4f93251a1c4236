"""Flask REST API exposing the vehicle expense services."""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from vehicle_common.aggregation import GRANULARITIES, chart_series, summarize
from vehicle_common.config import Settings, load_settings
from vehicle_common.exceptions import PersistenceError, ValidationError
from vehicle_common.filtering import ExpenseFilter, filter_and_sort, validate_sort_direction
from vehicle_common.logging_config import configure_logging
from vehicle_common.results import ActionResult
from vehicle_common.services import ExpenseService
from vehicle_common.storage import Database


def create_app(
    database_url: Optional[str] = None, settings: Optional[Settings] = None
) -> Flask:
    app = Flask(__name__)

    settings = settings or load_settings(database_url)
    if settings.is_development:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        CORS(app, resources={r"/*": {"origins": settings.allowed_origins}}, supports_credentials=True)
    else:
        CORS(app)

    database = Database(settings.database_url, echo=settings.sql_echo)
    database.create_all()
    expense_service = ExpenseService(database)
    app.extensions["expense_service"] = expense_service

    def _result(result: ActionResult, status: int = 200):
        if not result.success:
            return jsonify(result.to_dict()), 400
        return jsonify(result.to_dict()), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        app.logger.warning("Validation error: %s", exc)
        return jsonify({"success": False, "error": "Validation error", "details": str(exc)}), 400

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        app.logger.error("Persistence error: %s", exc)
        return jsonify({"success": False, "error": "Persistence error"}), 500

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _ids_from_body() -> Any:
        ids = _json_body().get("ids")
        if not isinstance(ids, list):
            raise ValidationError("ids must be a list of identifiers")
        return ids

    @app.get("/expenses")
    def list_expenses():
        result = expense_service.list()
        if not result.success:
            return _result(result)
        criteria = ExpenseFilter.from_mapping(request.args)
        direction = validate_sort_direction(request.args.get("sort", "desc"))
        if criteria.is_empty and direction == "desc":
            return _result(result)
        return _result(ActionResult.ok(filter_and_sort(result.data, criteria, direction)))

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        return _result(expense_service.create(payload), 201)

    @app.post("/expenses/delete")
    def delete_expenses():
        return _result(expense_service.delete(_ids_from_body()))

    @app.post("/expenses/duplicate")
    def duplicate_expenses():
        return _result(expense_service.duplicate(_ids_from_body()), 201)

    @app.delete("/expenses/<expense_id>")
    def delete_expense(expense_id: str):
        return _result(expense_service.delete([expense_id]))

    @app.post("/expenses/<expense_id>/duplicate")
    def duplicate_expense(expense_id: str):
        return _result(expense_service.duplicate([expense_id]), 201)

    @app.get("/overview")
    def overview():
        granularity = request.args.get("granularity", "month")
        if granularity not in GRANULARITIES:
            raise ValidationError(f"granularity must be one of: {', '.join(GRANULARITIES)}")
        expense_type = request.args.get("type") or None
        result = expense_service.list()
        if not result.success:
            return _result(result)
        expenses = result.data
        payload = {
            "summary": summarize(expenses),
            "granularity": granularity,
            "series": chart_series(expenses, granularity=granularity, expense_type=expense_type),
        }
        return _result(ActionResult.ok(payload))

    return app


def main() -> None:  # pragma: no cover - manual execution
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    app.run(debug=settings.is_development)


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
