import datetime

import pytest

from airport_inspector.app import Direction, Inspector, main
from airport_inspector.database import DatabaseError, QueryResult


class FakeDatabase:
    def __init__(self, succeed=True, fail_requests=False):
        self.succeed = succeed
        self.fail_requests = fail_requests
        self.connected = False
        self.last_error = ""
        self.calls = []
        self.disconnects = 0

    def connect(self):
        self.calls.append(("connect",))
        self.connected = self.succeed
        self.last_error = "" if self.succeed else "connection refused"
        return self.succeed

    def disconnect(self):
        self.disconnects += 1
        self.connected = False

    def _check(self):
        if self.fail_requests:
            raise DatabaseError("request failed")

    def airports(self):
        self._check()
        return QueryResult(
            ("Аэропорт", "Код аэропорта"),
            [("Внуково", "VKO"), ("Пулково", "LED")],
        )

    def arrivals(self, code, date):
        self._check()
        self.calls.append(("arrivals", code, date))
        return QueryResult(("Рейс", "Прибытие", "Аэропорт"), [("PG0001", "t", "Пулково")])

    def departures(self, code, date):
        self._check()
        self.calls.append(("departures", code, date))
        return QueryResult(("Рейс", "Вылет", "Аэропорт"), [("PG0002", "t", "Внуково")])

    def data_per_year(self, code):
        self._check()
        self.calls.append(("year", code))
        rows = [(i + 1, datetime.date(2016, 9, 1)) for i in range(12)]
        return QueryResult(("Количество рейсов", "Месяц"), rows)

    def data_per_month(self, code):
        self._check()
        self.calls.append(("month", code))
        rows = [(3, datetime.date(2017, 1, 5)), (7, datetime.date(2017, 1, 6))]
        return QueryResult(("Количество рейсов", "День"), rows)


class FakeTimer:
    def __init__(self, callback):
        self.callback = callback
        self.starts = 0

    def start(self):
        self.starts += 1

    def cancel(self):
        pass


def make(succeed=True, fail_requests=False):
    db = FakeDatabase(succeed, fail_requests)
    return Inspector(db, FakeTimer), db


def test_initial_state_is_disconnected():
    inspector, _ = make()
    assert inspector.status == "Не подключен к БД"
    assert inspector.controls_enabled is False


def test_successful_connection_loads_airports():
    inspector, _ = make()
    assert inspector.connect() is True
    assert inspector.status == "Подключено к БД"
    assert inspector.status_color == "green"
    assert inspector.controls_enabled is True
    assert inspector.airports == {"Внуково": "VKO", "Пулково": "LED"}
    assert inspector.airport_names == ["Внуково", "Пулково"]
    assert inspector.model.headers == ("Аэропорт", "Код аэропорта")


def test_failed_connection_reports_and_starts_timer():
    inspector, db = make(succeed=False)
    assert inspector.connect() is False
    assert inspector.status == "Не удалось подключиться к БД!"
    assert inspector.status_color == "red"
    assert db.disconnects == 1
    assert inspector.timer.starts == 1
    assert inspector.messages == [("critical", "connection refused")]


def test_timer_callback_reconnects():
    inspector, db = make(succeed=False)
    inspector.connect()
    db.succeed = True
    inspector.timer.callback()
    assert inspector.status == "Подключено к БД"
    assert db.calls.count(("connect",)) == 2


def test_schedule_arrival_uses_airport_code():
    inspector, db = make()
    inspector.connect()
    result = inspector.schedule("Пулково", "05.01.2017", Direction.ARRIVAL)
    assert ("arrivals", "LED", "05.01.2017") in db.calls
    assert result.rows == [("PG0001", "t", "Пулково")]
    assert inspector.model is result


def test_schedule_departure():
    inspector, db = make()
    inspector.connect()
    result = inspector.schedule("Внуково", "05.01.2017", Direction.DEPARTURE)
    assert ("departures", "VKO", "05.01.2017") in db.calls
    assert result.headers[1] == "Вылет"


def test_schedule_without_connection_does_nothing():
    inspector, db = make()
    assert inspector.schedule("Внуково", "05.01.2017", Direction.ARRIVAL) is None
    assert db.calls == []


def test_request_error_becomes_warning():
    inspector, _ = make(fail_requests=True)
    inspector.connect()
    assert inspector.model is None
    assert inspector.messages == [("warning", "request failed")]


def test_show_workload_fills_statistic_and_disables_main_view():
    inspector, db = make()
    inspector.connect()
    stat = inspector.show_workload("Пулково")
    assert ("year", "LED") in db.calls
    assert ("month", "LED") in db.calls
    assert stat.title == "Загруженность аэропорта Пулково"
    assert stat.visible is True
    assert inspector.central_enabled is False
    assert sorted(stat.year_counts) == list(range(1, 13))
    assert stat.month_points == [(5, 3), (6, 7)]


def test_closing_statistic_enables_main_view():
    inspector, _ = make()
    inspector.connect()
    inspector.show_workload("Внуково")
    inspector.statistic.close()
    assert inspector.central_enabled is True
    assert inspector.statistic.visible is False


def test_direction_labels_select_request():
    assert Direction.ARRIVAL.value == "Прибытие"
    assert Direction.DEPARTURE.value == "Вылет"
    inspector, db = make()
    inspector.connect()
    arrival = inspector.schedule("Пулково", "05.01.2017", Direction("Прибытие"))
    departure = inspector.schedule("Пулково", "05.01.2017", Direction("Вылет"))
    assert arrival.headers[1] == "Прибытие"
    assert departure.headers[1] == "Вылет"
    assert ("arrivals", "LED", "05.01.2017") in db.calls
    assert ("departures", "LED", "05.01.2017") in db.calls


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit) as info:
        main(["--port", "abc"])
    assert info.value.code == 2