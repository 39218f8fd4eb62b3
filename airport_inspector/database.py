"""Access to the flights database: airports, schedules and workload data."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

__all__ = [
    "ConnectionSettings",
    "QueryResult",
    "DatabaseError",
    "Database",
    "convert_date",
]

DB_NAME = "demo"
PASSWORD = "password"

_AIRPORTS_SQL = (
    "SELECT airport_name->>'ru' AS name, airport_code "
    "FROM bookings.airports_data ORDER BY name"
)

_ARRIVALS_SQL = (
    "SELECT flight_no, scheduled_arrival, ad.airport_name->>'ru' AS name "
    "FROM bookings.flights f "
    "JOIN bookings.airports_data ad ON ad.airport_code = f.departure_airport "
    "WHERE (f.arrival_airport = :code "
    "AND CAST(f.scheduled_arrival AS date) = CAST(:day AS date)) "
    "ORDER BY name"
)

_DEPARTURES_SQL = (
    "SELECT flight_no, scheduled_departure, ad.airport_name->>'ru' AS name "
    "FROM bookings.flights f "
    "JOIN bookings.airports_data ad ON ad.airport_code = f.arrival_airport "
    "WHERE (f.departure_airport = :code "
    "AND CAST(f.scheduled_departure AS date) = CAST(:day AS date)) "
    "ORDER BY name"
)

_PER_YEAR_SQL = (
    "SELECT count(flight_no), date_trunc('month', scheduled_departure) AS Month "
    "FROM bookings.flights f "
    "WHERE (CAST(scheduled_departure AS date) > CAST('2016-08-31' AS date) "
    "AND CAST(scheduled_departure AS date) <= CAST('2017-08-31' AS date)) AND "
    "(departure_airport = :code OR arrival_airport = :code) "
    "GROUP BY Month"
)

_PER_MONTH_SQL = (
    "SELECT count(flight_no), date_trunc('day', scheduled_departure) AS Day "
    "FROM bookings.flights f "
    "WHERE (CAST(scheduled_departure AS date) > CAST('2016-08-31' AS date) "
    "AND CAST(scheduled_departure AS date) <= CAST('2017-08-31' AS date)) AND "
    "(departure_airport = :code OR arrival_airport = :code) "
    "GROUP BY Day"
)


class DatabaseError(Exception):
    """Raised when the database cannot be reached or a request fails."""


@dataclass(frozen=True)
class ConnectionSettings:
    """Where and how to connect to the flights database."""

    host: str = "localhost"
    database: str = DB_NAME
    user: str = "user"
    password: str = PASSWORD
    port: int = 5432
    driver: str = "postgresql"

    def url(self) -> URL:
        """Build the SQLAlchemy URL for these settings."""
        return URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


@dataclass
class QueryResult:
    """Column headers and the rows a request returned."""

    headers: tuple[str, ...]
    rows: list[tuple[Any, ...]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)


def convert_date(date: str) -> str:
    """Turn a ``dd.mm.yyyy`` date into the ``yyyy-mm-dd`` form the database expects."""
    day, month, year = date[:2], date[3:5], date[6:]
    return f"{year}-{month}-{day}"


class Database:
    """A connection to the flights database and the requests the inspector makes."""

    def __init__(
        self,
        connect: Callable[[URL], Any] | None = None,
        settings: ConnectionSettings | None = None,
    ) -> None:
        self._connect = connect or create_engine
        self.settings = settings or ConnectionSettings()
        self._engine: Any = None
        self.connected = False
        self.last_error = ""

    def connect(self) -> bool:
        """Open the connection; return whether it succeeded."""
        try:
            engine = self._connect(self.settings.url())
            with engine.connect():
                pass
        except SQLAlchemyError as exc:
            self.last_error = str(exc)
            self.connected = False
            return False
        self._engine = engine
        self.connected = True
        self.last_error = ""
        return True

    def disconnect(self) -> None:
        """Close the connection if one is open."""
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self.connected = False

    def _query(
        self, sql: str, headers: tuple[str, ...], params: Mapping[str, Any] | None = None
    ) -> QueryResult:
        if not self.connected or self._engine is None:
            raise DatabaseError("not connected to the database")
        try:
            with self._engine.connect() as conn:
                rows = [tuple(row) for row in conn.execute(text(sql), dict(params or {}))]
        except SQLAlchemyError as exc:
            self.last_error = str(exc)
            raise DatabaseError(str(exc)) from exc
        return QueryResult(headers, rows)

    def airports(self) -> QueryResult:
        """Airport names with their codes, ordered by name."""
        return self._query(_AIRPORTS_SQL, ("Аэропорт", "Код аэропорта"))

    def arrivals(self, airport_code: str, date: str) -> QueryResult:
        """Flights arriving at an airport on a ``dd.mm.yyyy`` date."""
        return self._query(
            _ARRIVALS_SQL,
            ("Рейс", "Прибытие", "Аэропорт"),
            {"code": airport_code, "day": convert_date(date)},
        )

    def departures(self, airport_code: str, date: str) -> QueryResult:
        """Flights departing from an airport on a ``dd.mm.yyyy`` date."""
        return self._query(
            _DEPARTURES_SQL,
            ("Рейс", "Вылет", "Аэропорт"),
            {"code": airport_code, "day": convert_date(date)},
        )

    def data_per_year(self, airport_code: str) -> QueryResult:
        """Flight counts per month over the covered year."""
        return self._query(
            _PER_YEAR_SQL, ("Количество рейсов", "Месяц"), {"code": airport_code}
        )

    def data_per_month(self, airport_code: str) -> QueryResult:
        """Flight counts per day over the covered year."""
        return self._query(
            _PER_MONTH_SQL, ("Количество рейсов", "День"), {"code": airport_code}
        )