"""Top-level package for the receipt points API.

A small FastAPI service that accepts purchase receipts, keeps them in
process memory and scores them with a fixed set of loyalty-point rules.
The package is split into the usual layers: ``core`` (settings, logging,
Sentry), ``models`` (Pydantic schemas), ``services`` (receipt store and
points calculator) and ``api`` (routers and exception handlers).

To run the API locally you can execute:

```bash
uvicorn receipt_points.api.main:app --reload --port 8080
```

Configuration values can be overridden with environment variables or a
``.env`` file at the project root.
"""

__all__: list[str] = []
