# healthboard

The web-facing side of an endpoint health dashboard. It provides:

- **Configuration objects** for the web listener, the dashboard UI and
  scheduled maintenance windows, each with its defaults and validation.
- **SVG badges** showing uptime and average response time over the last
  hour, day or week, coloured according to how healthy the endpoint is.
- **Paging** of status queries, with safe defaults and an upper bound on
  page size.
- **A WSGI application** that serves the dashboard: the configuration
  endpoint for the front end, the single-page application, the favicon,
  static files with optional gzip compression, and a development CORS
  wrapper.
- **A controller** that builds the application and starts or stops the
  server that hosts it.

The package uses only the Python standard library (Python 3.10 or newer).

## Configuration

```python
from healthboard.web import default_web_config
from healthboard.ui import default_ui_config
from healthboard.maintenance import default_maintenance_config

web = default_web_config()
print(web.socket_address())        # 0.0.0.0:8080

ui = default_ui_config()           # default title and header

maintenance = default_maintenance_config()
print(maintenance.is_enabled())    # False: no maintenance window by default
```

Every configuration class has a `validate_and_set_defaults()` method. It
fills in missing values and raises the module's error (`WebConfigError`,
`MaintenanceError`, `TemplateError`) when something is out of range or
malformed, for example a port above 65535, a maintenance start time not in
`hh:mm` form, a duration outside (0, 24h), or an unknown weekday.

`parse_hhmm` turns a `hh:mm` start time into the offset from midnight.
`MaintenanceConfig.is_under_maintenance(now)` tells whether the given UTC
moment falls inside the configured window.

## Badges

```python
from healthboard.badge import (
    uptime_badge_color,
    response_time_badge_color,
    uptime_badge_svg,
    response_time_badge_svg,
)

uptime_badge_color(0.99)           # "#40cc11"
response_time_badge_color(700)     # "#cc8111"

svg = uptime_badge_svg("24h", 0.9725)
svg = response_time_badge_svg("7d", 123)
```

The supported durations are `1h`, `24h` and `7d`. `badge_time_range`
raises `UnsupportedDurationError` for anything else.

## Paging

`page_and_page_size(query)` reads the `page` and `pageSize` parameters of a
request query. Missing or invalid values fall back to page 1 and a page
size of 20; page sizes above the maximum are capped.

## Serving the dashboard

```python
from healthboard.app import create_app, development_cors, gzip_middleware
from healthboard.server import Controller
from healthboard.ui import default_ui_config
from healthboard.web import default_web_config

app = create_app("./web/static", None, default_ui_config())

controller = Controller()
controller.handle(None, default_web_config(), default_ui_config())
# ...
controller.shutdown()
```

`create_app` returns a `StatusApp`, a plain WSGI callable, so it can also be
mounted under any WSGI server. `gzip_middleware` compresses responses for
clients that accept gzip, and `development_cors` adds the CORS headers a
locally served front end needs during development.