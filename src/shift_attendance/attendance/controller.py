from __future__ import annotations

import csv
import io
import re
from datetime import date
from functools import wraps

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import month_bounds, parse_iso_date
from ..core.constants import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_RECENT_ACTIVITY_LIMIT,
    EMPLOYEE_ID_HEADER,
    ROLE_HEADER,
)
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ClockRejected, StorageUnavailable, ValidationError
from ..container import Container

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")

CSV_FIELDS = [
    "date",
    "employee_id",
    "clock_in_time",
    "clock_out_time",
    "working_hours",
    "status",
    "is_late",
    "is_auto_clocked_out",
    "location",
    "notes",
]


def register(app: Flask, container: Container) -> None:
    def identity_required(view):
        """The upstream auth layer asserts who is calling via trusted headers."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            employee_id = (request.headers.get(EMPLOYEE_ID_HEADER) or "").strip()
            if not employee_id:
                return jsonify({"error": "unauthenticated", "message": "Missing employee identity"}), 401

            g.employee_id = employee_id
            try:
                g.role = Role((request.headers.get(ROLE_HEADER) or Role.EMPLOYEE.value).strip().lower())
            except ValueError:
                g.role = Role.EMPLOYEE
            return view(*args, **kwargs)

        return wrapper

    def owner_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if g.role != Role.OWNER:
                raise AuthorizationError("Only owners can view the team overview")
            return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(ClockRejected)
    def _clock_rejected(exc: ClockRejected):
        return jsonify({"error": exc.code, "message": exc.message}), 409

    @app.errorhandler(ValidationError)
    def _invalid(exc: ValidationError):
        return jsonify({"error": "invalid_request", "message": str(exc)}), 400

    @app.errorhandler(AuthorizationError)
    def _forbidden(exc: AuthorizationError):
        return jsonify({"error": "forbidden", "message": str(exc)}), 403

    @app.errorhandler(StorageUnavailable)
    def _storage_unavailable(exc: StorageUnavailable):
        app.logger.error("Attendance store unavailable: %s", exc)
        return jsonify({"error": "storage_unavailable", "message": "Please try again shortly"}), 503

    def _today() -> date:
        return container.clock.now().date()

    def _target_employee(*, allow_all: bool = True) -> str:
        """Employee the query is about; owners may ask for anyone, or "*" for all."""

        requested = (request.args.get("employee_id") or "").strip()
        if not requested or requested == g.employee_id:
            return g.employee_id
        if g.role != Role.OWNER:
            raise AuthorizationError("You can only view your own attendance")
        if requested == "*" and not allow_all:
            raise ValidationError("employee_id must name one employee")
        return requested

    def _arg_date(name: str, default: date) -> date:
        value = request.args.get(name)
        return parse_iso_date(value) if value else default

    def _arg_int(name: str, default: int) -> int:
        value = request.args.get(name)
        if value in (None, ""):
            return default
        try:
            return int(value)
        except ValueError:
            raise ValidationError(f"{name} must be an integer") from None

    def _arg_month() -> tuple[int, int]:
        today = _today()
        return _arg_int("year", today.year), _arg_int("month", today.month)

    def _body() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    @identity_required
    def clock_in():
        body = _body()
        record = container.clock_service.clock_in(
            g.employee_id,
            location=body.get("location"),
            notes=body.get("notes"),
        )
        return jsonify({"record": record.to_dict()}), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    @identity_required
    def clock_out():
        record = container.clock_service.clock_out(g.employee_id, notes=_body().get("notes"))
        return jsonify({"record": record.to_dict()})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @identity_required
    def today():
        record = container.clock_service.get_today(g.employee_id)
        return jsonify({"record": record.to_dict() if record else None})

    @app.route("/api/attendance/records", methods=["GET"], endpoint="attendance_records")
    @identity_required
    def records():
        today_ = _today()
        start = _arg_date("from", today_.replace(day=1))
        end = _arg_date("to", today_)
        rows = container.clock_service.get_range(_target_employee(), start, end)
        return jsonify({"records": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @identity_required
    def history():
        rows = container.clock_service.get_history(
            _target_employee(allow_all=False),
            limit=_arg_int("limit", DEFAULT_HISTORY_LIMIT),
        )
        return jsonify({"records": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @identity_required
    def stats():
        year, month = _arg_month()
        result = container.aggregator.monthly_stats(_target_employee(), year, month, as_of=_today())
        return jsonify({"stats": result.to_dict()})

    @app.route("/api/attendance/weekly", methods=["GET"], endpoint="attendance_weekly")
    @identity_required
    def weekly():
        anchor = _arg_date("anchor", _today())
        result = container.aggregator.weekly_hours(_target_employee(allow_all=False), anchor)
        return jsonify({"weekly": result.to_dict()})

    @app.route("/api/attendance/team", methods=["GET"], endpoint="attendance_team")
    @identity_required
    @owner_required
    def team():
        year, month = _arg_month()
        overview = container.aggregator.team_overview(
            year,
            month,
            recent_limit=_arg_int("limit", DEFAULT_RECENT_ACTIVITY_LIMIT),
            as_of=_today(),
        )
        return jsonify({"team": overview.to_dict()})

    def _write_report_csv(*, rows, filename: str):
        """Write records to a CSV download (utf-8 with BOM for spreadsheet apps)."""

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for r in rows:
            data = r.to_dict()
            writer.writerow({k: ("" if data.get(k) is None else data.get(k)) for k in CSV_FIELDS})

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    @identity_required
    def report_csv():
        today_ = _today()
        default_start, _ = month_bounds(today_.year, today_.month)
        start = _arg_date("from", default_start)
        end = _arg_date("to", today_)
        employee = _target_employee()

        rows = container.clock_service.get_range(employee, start, end)
        scope = "team" if employee == "*" else _UNSAFE_FILENAME_CHARS.sub("_", employee)
        filename = f"attendance_{scope}_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(rows=rows, filename=filename)
