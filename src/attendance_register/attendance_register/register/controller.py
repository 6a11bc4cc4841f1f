from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..views.export import export_filename, write_csv
from ..views.filters import PeriodFilter, build_view, export_table, format_percentage

logger = logging.getLogger(__name__)

# Per-client elevated mode, kept in the signed Flask session cookie.
SESSION_ADMIN_KEY = "is_admin"


def register(app: Flask, container: Container) -> None:
    engine = container.engine
    controller = container.sync_controller
    session_service = container.session_service
    editor = container.register_service

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except AuthenticationError as e:
                return jsonify({"success": False, "message": str(e)}), 401
            except AuthorizationError as e:
                return jsonify({"success": False, "message": str(e)}), 403

        return wrapper

    def _elevated() -> bool:
        return bool(session.get(SESSION_ADMIN_KEY))

    def _body() -> dict:
        return request.get_json(silent=True) or {}

    def _document_payload():
        document = engine.call(lambda: controller.document)
        return {"success": True, "document": document.to_dict()}

    def _period_from_args() -> PeriodFilter:
        period = PeriodFilter()
        month = request.args.get("month", "")
        if month:
            return period.select_month(month)
        return period.with_start(request.args.get("start", "")).with_end(request.args.get("end", ""))

    @app.route("/api/document", methods=["GET"], endpoint="document")
    def document():
        return jsonify(_document_payload())

    @app.route("/api/view", methods=["GET"], endpoint="view")
    @json_errors
    def view():
        period = _period_from_args()
        doc = engine.call(lambda: controller.document)
        v = build_view(doc, query=request.args.get("q", ""), period=period)
        return jsonify(
            {
                "success": True,
                "title": doc.title,
                "period": {"month": period.month, "start": period.start, "end": period.end},
                "columns": [c.to_dict() for c in v.columns],
                "teachers": [
                    {**t.to_dict(), "percent": format_percentage(v.percentages[t.id])} for t in v.teachers
                ],
                "data": doc.data,
            }
        )

    @app.route("/api/status", methods=["GET"], endpoint="status")
    def status():
        state, phase, endpoint = engine.call(lambda: (controller.sync_state, controller.phase, controller.endpoint))
        return jsonify(
            {
                "success": True,
                "status": state.status.value,
                "message": state.message,
                "phase": phase.value,
                "is_admin": _elevated(),
                "endpoint": endpoint or "",
            }
        )

    @app.route("/api/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        engine.call(session_service.verify, str(_body().get("password", "")))
        session.permanent = True
        session[SESSION_ADMIN_KEY] = True
        logger.info("Elevated mode enabled for client %s", request.remote_addr)
        return jsonify({"success": True, "is_admin": True})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.pop(SESSION_ADMIN_KEY, None)
        return jsonify({"success": True, "is_admin": False})

    @app.route("/api/sync-url", methods=["POST"], endpoint="sync_url")
    @json_errors
    def sync_url():
        result = engine.run(controller.handle_save_url(str(_body().get("url", "")), elevated=_elevated()))
        logger.info("Endpoint updated; manual sync finished with %s", result.value)
        state = engine.call(lambda: controller.sync_state)
        return jsonify({"success": True, "status": result.value, "message": state.message})

    @app.route("/api/cells", methods=["POST"], endpoint="update_cell")
    @json_errors
    def update_cell():
        body = _body()
        engine.call(
            editor.update_cell,
            str(body.get("teacher_id", "")),
            str(body.get("column_id", "")),
            str(body.get("value", "")),
            elevated=_elevated(),
        )
        return jsonify(_document_payload())

    @app.route("/api/teachers", methods=["POST"], endpoint="add_teachers")
    @json_errors
    def add_teachers():
        added = engine.call(editor.add_teachers, str(_body().get("names", "")), elevated=_elevated())
        return jsonify({"success": True, "added": [t.to_dict() for t in added]}), 201

    @app.route("/api/teachers/<teacher_id>", methods=["DELETE"], endpoint="delete_teacher")
    @json_errors
    def delete_teacher(teacher_id: str):
        engine.call(editor.delete_teacher, teacher_id, elevated=_elevated())
        return jsonify(_document_payload())

    @app.route("/api/columns", methods=["POST"], endpoint="add_column")
    @json_errors
    def add_column():
        body = _body()
        column = engine.call(
            editor.add_column,
            str(body.get("title", "")),
            str(body.get("type", "status")),
            body.get("date") or None,
            elevated=_elevated(),
        )
        return jsonify({"success": True, "column": column.to_dict()}), 201

    @app.route("/api/columns/<column_id>", methods=["PATCH"], endpoint="edit_column")
    @json_errors
    def edit_column(column_id: str):
        body = _body()
        if "title" in body:
            engine.call(editor.rename_column, column_id, str(body["title"]), elevated=_elevated())
        if "index" in body:
            try:
                index = int(body["index"])
            except (TypeError, ValueError) as e:
                raise ValidationError("index harus berupa angka") from e
            engine.call(editor.move_column, column_id, index, elevated=_elevated())
        return jsonify(_document_payload())

    @app.route("/api/columns/<column_id>", methods=["DELETE"], endpoint="delete_column")
    @json_errors
    def delete_column(column_id: str):
        engine.call(editor.delete_column, column_id, elevated=_elevated())
        return jsonify(_document_payload())

    @app.route("/api/title", methods=["PUT"], endpoint="set_title")
    @json_errors
    def set_title():
        engine.call(editor.set_title, str(_body().get("title", "")), elevated=_elevated())
        return jsonify(_document_payload())

    @app.route("/api/export.csv", methods=["GET"], endpoint="export_csv")
    @json_errors
    def export_csv():
        period = _period_from_args()
        doc = engine.call(lambda: controller.document)
        table = export_table(doc, build_view(doc, query=request.args.get("q", ""), period=period))
        filename = export_filename(doc.title, "csv")
        return app.response_class(
            write_csv(table),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
