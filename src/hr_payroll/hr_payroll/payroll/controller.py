from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_hhmm, parse_month
from ..core.exceptions import DomainError, InvalidStatusTransition, NotFoundError, ValidationError
from ..container import Container
from ..shifts.model import ShiftExpectation
from .export import export_rows, write_csv

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"error": message}), status

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(InvalidStatusTransition)
    def _transition_error(e: InvalidStatusTransition):
        return _error(str(e), 400)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _error(str(e), 404)

    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        logger.error("Payroll request failed: %s", e)
        return _error(str(e), 500)

    def _json_body() -> dict:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Dữ liệu gửi lên không hợp lệ")
        return body

    def _month_arg(name: str, *, default: date | None = None) -> date:
        value = request.args.get(name)
        if not value:
            if default is None:
                raise ValidationError(f"Thiếu tham số {name}")
            return default
        return parse_month(value)

    def _shift_arg():
        start_s = request.args.get("shift_start")
        end_s = request.args.get("shift_end")
        if not start_s or not end_s:
            return None
        return ShiftExpectation(start_time=parse_hhmm(start_s), end_time=parse_hhmm(end_s))

    @app.route("/api/payroll/settings", methods=["GET"], endpoint="payroll_settings")
    def payroll_settings():
        return jsonify(container.settings_service.get().to_dict())

    @app.route("/api/payroll/settings", methods=["PUT"], endpoint="payroll_settings_update")
    def payroll_settings_update():
        body = _json_body()
        updated = container.settings_service.update(
            default_shift_rate=body.get("default_shift_rate"),
            default_overtime_rate=body.get("default_overtime_rate"),
            late_penalty_per_time=body.get("late_penalty_per_time"),
            absence_penalty_per_day=body.get("absence_penalty_per_day"),
        )
        return jsonify(updated.to_dict())

    @app.route("/api/payroll/working-data", methods=["GET"], endpoint="payroll_working_data")
    def payroll_working_data():
        employee_id = request.args.get("employee_id") or ""
        month = _month_arg("month")
        working = container.payroll_service.compute_working_data(
            employee_id=employee_id,
            month=month,
            shift=_shift_arg(),
        )
        return jsonify(
            {
                "employee_id": employee_id,
                "month": month.strftime("%Y-%m"),
                "working_days": working.working_days,
                "total_hours": working.total_hours,
                "overtime_hours": working.overtime_hours,
                "late_count": working.late_count,
                "early_leave_count": working.early_leave_count,
            }
        )

    @app.route("/api/payroll/calculate", methods=["POST"], endpoint="payroll_calculate")
    def payroll_calculate():
        salary_input = container.payroll_service.build_input(_json_body())
        breakdown = container.payroll_service.calculate(salary_input)
        return jsonify(breakdown.to_dict())

    @app.route("/api/payroll/salaries", methods=["POST"], endpoint="payroll_save")
    def payroll_save():
        body = _json_body()
        if not body.get("employee_id") or not body.get("month"):
            raise ValidationError("Vui lòng chọn nhân viên và tháng")

        salary_input = container.payroll_service.build_input(body)
        record = container.payroll_service.save_salary(
            employee_id=str(body["employee_id"]),
            month=parse_month(str(body["month"])),
            salary_input=salary_input,
            violation_notes=body.get("violation_notes"),
            notes=body.get("notes"),
        )
        return jsonify(record.to_dict()), 201

    @app.route("/api/payroll/salaries", methods=["GET"], endpoint="payroll_list")
    def payroll_list():
        today = date.today().replace(day=1)
        start = _month_arg("start", default=today)
        end = _month_arg("end", default=start)
        records = container.payroll_service.list_salaries(
            start_month=start,
            end_month=end,
            employee_id=request.args.get("employee_id") or None,
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/payroll/salaries/<int:record_id>/status", methods=["PATCH"], endpoint="payroll_status")
    def payroll_status(record_id: int):
        body = _json_body()
        record = container.payroll_service.update_status(record_id=record_id, status=body.get("status") or "")
        return jsonify(record.to_dict())

    @app.route("/api/payroll/bulk-run", methods=["POST"], endpoint="payroll_bulk_run")
    def payroll_bulk_run():
        body = _json_body()
        month_s = body.get("month")
        if not month_s:
            raise ValidationError("Thiếu tham số month")
        result = container.bulk_runner.run_for_month(parse_month(str(month_s)))
        return jsonify(result.to_dict())

    @app.route("/api/payroll/statistics", methods=["GET"], endpoint="payroll_statistics")
    def payroll_statistics():
        start = _month_arg("start")
        end = _month_arg("end", default=start)
        monthly = container.payroll_service.monthly_statistics(start_month=start, end_month=end)
        components = container.payroll_service.component_breakdown(start_month=start, end_month=end)
        return jsonify(
            {
                "monthly": [m.to_dict() for m in monthly],
                "components": components.to_dict(),
            }
        )

    @app.route("/api/payroll/salaries.csv", methods=["GET"], endpoint="payroll_export_csv")
    def payroll_export_csv():
        start = _month_arg("start")
        end = _month_arg("end", default=start)
        records = container.payroll_service.list_salaries(start_month=start, end_month=end)

        csv_bytes = write_csv(export_rows(records))
        filename = f"bang_luong_{start.strftime('%Y%m')}_{end.strftime('%Y%m')}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
