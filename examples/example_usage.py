"""Example: the vacation rules straight from Python (no Flask, no database).

Controllers stay thin; the decision lives in the engine and the services.
"""

from src.leave_calendar.leave_calendar.core.enums import LeaveType
from src.leave_calendar.leave_calendar.leaves.model import LeaveRecord
from src.leave_calendar.leave_calendar.vacation.engine import VacationRuleEngine


def main():
    history = [
        LeaveRecord(employee_id="emp1", type=LeaveType.VACATION, acquisitive_period_start="2024-01-01", days_off=10),
        LeaveRecord(employee_id="emp1", type=LeaveType.VACATION, acquisitive_period_start="2024-01-01", days_off=10),
    ]
    engine = VacationRuleEngine()
    for requested in (4, 8, 10, 11):
        result = engine.validate(history, "emp1", requested, "2024-01-01")
        print(requested, result.valid, result.message or "")


if __name__ == "__main__":
    main()
