# airport-inspector

A small front end to a PostgreSQL "bookings" demo database. It can:

- list the airports known to the database;
- look up the arrivals or departures of an airport on a given day;
- work out an airport's workload: the number of flights per month over the
  year from September 2016 to August 2017, and the number of flights per
  day within a chosen month.

Queries go through SQLAlchemy. The default connection URL uses the
`postgresql` dialect, so a PostgreSQL driver that SQLAlchemy can use has to
be installed alongside this package.

## The command

```
airport-inspector [--host HOST] [--port PORT] [--user USER] [--database NAME]
                  [--departures] [--workload] [airport] [date]
```

The defaults are host `localhost`, port `5432`, user `user` and database
`demo`. The password is read from the environment variable
`AIRPORT_INSPECTOR_PASSWORD`.

- With no airport, it prints the list of airports (name and code),
  tab-separated with a header line.
- With an airport name and a date written as `dd.mm.yyyy`, it prints that
  day's arrivals, or departures with `--departures`.
- With an airport name and `--workload`, it prints the heading
  "Загруженность аэропорта <name>" and the flight count for each month,
  January to December.
- An airport name with neither a date nor `--workload` is an error
  (exit status 2).

If the connection fails, the command reports it on standard error and exits
with status 1; it does not wait and retry. Errors from a query are printed
on standard error and also give exit status 1.

## Using it from Python

- `airport_inspector.database`
  - `ConnectionSettings` holds host, database, user, password, port and
    driver; `url()` builds the SQLAlchemy URL.
  - `Database(connect=None, settings=None)` opens a connection with
    `connect()` (returns `True` or `False`, keeping the failure text in
    `last_error`) and closes it with `disconnect()`. Its queries
    `airports()`, `arrivals(code, date)`, `departures(code, date)`,
    `data_per_year(code)` and `data_per_month(code)` return a `QueryResult`
    (`headers` and `rows`, iterable over the rows) and raise
    `DatabaseError` when not connected or when the query fails.
  - `convert_date("dd.mm.yyyy")` returns `"yyyy-mm-dd"`.
- `airport_inspector.timer`
  - `ReconnectTimer(callback, interval=5.0)` calls `callback` once,
    `interval` seconds after `start()`; calling `start()` again restarts the
    countdown, `cancel()` stops it, and `active` tells whether one is pending.
- `airport_inspector.statistic`
  - `year_series(rows)` reorders twelve September-to-August monthly counts
    into January-to-December order, counting missing rows as zero.
  - `year_axis_range(rows)` gives the vertical `AxisRange` for the yearly
    chart: from zero (or the lowest count, if negative) to the peak plus ten.
  - `group_by_month(rows)` turns `(count, day)` rows into
    `{month: [(day_of_month, count), ...]}`.
  - `month_axis_ranges(points)` gives the horizontal and vertical
    `AxisRange` for one month's points, and raises `ValueError` for none.
  - `AirportStatistic` keeps that state for one airport: `set_airport_name`,
    `receive_year`, `receive_month`, `select_month(index)` (0 is January),
    `show` and `close`, which resets the selection and calls each of
    `closed_listeners`.
- `airport_inspector.app`
  - `Inspector(database=None, timer_factory=None)` ties these together.
    `connect()` tries the database; on success it loads the airports
    (`load_airports()`, filling `airport_names` and `airports`), and on
    failure it records a message in `messages` and starts the reconnect
    timer, which calls `connect()` again after five seconds.
    `schedule(airport_name, date, direction)` takes a `Direction`
    (`ARRIVAL` or `DEPARTURE`); `show_workload(airport_name)` fills and
    returns its `AirportStatistic`.
  - `main(argv=None)` is the command described above.

## What it does not do

There is no graphical window and no chart drawing: the statistics module
computes the series and axis ranges a chart would use, but nothing renders
them. The command prints the monthly workload only; the per-day figures are
available from `AirportStatistic` in Python.

## Tests

The test suite uses pytest and runs against stand-in database connections,
so no server is needed:

```
pip install -e .[test]
pytest
```