"""The inspector: connection handling, airport list, schedules and workload."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from .database import ConnectionSettings, Database, DatabaseError, QueryResult
from .statistic import MONTHS, AirportStatistic
from .timer import ReconnectTimer

__all__ = ["Direction", "Inspector", "main"]

STATUS_DISCONNECTED = "Не подключен к БД"
STATUS_CONNECTING = "Подключение..."
STATUS_CONNECTED = "Подключено к БД"
STATUS_FAILED = "Не удалось подключиться к БД!"

CRITICAL = "critical"
WARNING = "warning"


class Direction(Enum):
    """Which side of the schedule to show."""

    ARRIVAL = "Прибытие"
    DEPARTURE = "Вылет"


def _default_timer(callback: Callable[[], object]) -> ReconnectTimer:
    return ReconnectTimer(callback)


class Inspector:
    """State of the main view and the reactions to the database's answers."""

    def __init__(
        self,
        database: Any = None,
        timer_factory: Callable[[Callable[[], object]], Any] | None = None,
    ) -> None:
        self.database = database if database is not None else Database()
        self.timer = (timer_factory or _default_timer)(self.connect)
        self.statistic = AirportStatistic()
        self.statistic.closed_listeners.append(self.close_statistic)
        self.airports: dict[str, str] = {}
        self.airport_names: list[str] = []
        self.model: QueryResult | None = None
        self.messages: list[tuple[str, str]] = []
        self.status = STATUS_DISCONNECTED
        self.status_color = "red"
        self.controls_enabled = False
        self.central_enabled = True

    def connect(self) -> bool:
        """Try to connect to the database and react to the outcome."""
        self.status = STATUS_CONNECTING
        self.status_color = "black"
        connected = bool(self.database.connect())
        self.on_connection_status(connected)
        return connected

    def on_connection_status(self, connected: bool) -> None:
        """Enable the controls on success; report and schedule a retry on failure."""
        if connected:
            self.status = STATUS_CONNECTED
            self.status_color = "green"
            self.controls_enabled = True
            self.load_airports()
            return
        self.database.disconnect()
        self.status = STATUS_FAILED
        self.status_color = "red"
        self.messages.append((CRITICAL, self.database.last_error))
        self.timer.start()

    def _request(self, call: Callable[[], QueryResult]) -> QueryResult | None:
        if not self.database.connected:
            return None
        try:
            return call()
        except DatabaseError as exc:
            self.messages.append((WARNING, str(exc)))
            return None

    def load_airports(self) -> QueryResult | None:
        """Fetch the airport list and remember each airport's code."""
        self.model = None
        result = self._request(self.database.airports)
        if result is None:
            return None
        for name, code, *_ in result:
            self.airport_names.append(name)
            self.airports[name] = code
        self.model = result
        return result

    def schedule(
        self, airport_name: str, date: str, direction: Direction
    ) -> QueryResult | None:
        """Arrivals or departures of an airport on a ``dd.mm.yyyy`` date."""
        code = self.airports.get(airport_name, "")
        if direction is Direction.ARRIVAL:
            result = self._request(lambda: self.database.arrivals(code, date))
        else:
            result = self._request(lambda: self.database.departures(code, date))
        if result is not None:
            self.model = result
        return result

    def show_workload(self, airport_name: str) -> AirportStatistic:
        """Open the workload view of an airport and fill it with data."""
        self.statistic.close()
        self.central_enabled = False
        self.statistic.set_airport_name(airport_name)
        code = self.airports.get(airport_name, "")
        year = self._request(lambda: self.database.data_per_year(code))
        if year is not None:
            self.statistic.receive_year(year.rows)
        month = self._request(lambda: self.database.data_per_month(code))
        if month is not None:
            self.statistic.receive_month(month.rows)
        self.statistic.show()
        return self.statistic

    def close_statistic(self) -> None:
        """React to the workload view being closed."""
        self.central_enabled = True


def _print_result(result: QueryResult) -> None:
    print("\t".join(result.headers))
    for row in result:
        print("\t".join(str(value) for value in row))


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    defaults = ConnectionSettings()
    parser = argparse.ArgumentParser(
        prog="airport-inspector",
        description="Show airports, schedules and workload from the flights database.",
    )
    parser.add_argument("--host", default=defaults.host)
    parser.add_argument("--port", type=int, default=defaults.port)
    parser.add_argument("--user", default=defaults.user)
    parser.add_argument("--database", default=defaults.database)
    parser.add_argument("airport", nargs="?", help="airport name")
    parser.add_argument("date", nargs="?", help="date as dd.mm.yyyy")
    parser.add_argument(
        "--departures", action="store_true", help="show departures instead of arrivals"
    )
    parser.add_argument(
        "--workload", action="store_true", help="show the airport's workload"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the inspector from the command line."""
    args = _parse_args(argv)
    password = os.environ.get("AIRPORT_INSPECTOR_PASSWORD", ConnectionSettings().password)
    settings = ConnectionSettings(
        host=args.host,
        port=args.port,
        user=args.user,
        database=args.database,
        password=password,
    )
    inspector = Inspector(Database(settings=settings))
    if not inspector.connect():
        inspector.timer.cancel()
        print(f"{inspector.status} {inspector.database.last_error}", file=sys.stderr)
        return 1
    try:
        if args.airport is None:
            if inspector.model is not None:
                _print_result(inspector.model)
        elif args.workload:
            statistic = inspector.show_workload(args.airport)
            print(statistic.title)
            for label, count in zip(MONTHS, statistic.year_counts):
                print(f"{label}\t{count}")
        elif args.date is not None:
            direction = Direction.DEPARTURE if args.departures else Direction.ARRIVAL
            result = inspector.schedule(args.airport, args.date, direction)
            if result is not None:
                _print_result(result)
        else:
            print("a date is required for a schedule", file=sys.stderr)
            return 2
        for _, text in inspector.messages:
            print(text, file=sys.stderr)
        return 1 if inspector.messages else 0
    finally:
        inspector.database.disconnect()


if __name__ == "__main__":
    sys.exit(main())