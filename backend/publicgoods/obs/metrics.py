"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNTER = Counter(
	"publicgoods_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"publicgoods_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

SEARCH_QUERIES = Counter(
	"publicgoods_search_queries_total",
	"Search requests resolved per entity",
	["entity", "mode"],
)

SEARCH_LATENCY = Histogram(
	"publicgoods_search_latency_seconds",
	"Search resolution latency",
	["entity"],
	buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

SEARCH_ERRORS = Counter(
	"publicgoods_search_errors_total",
	"Search requests that failed in the store",
	["entity"],
)

PROJECTS_SUBMITTED = Counter(
	"publicgoods_projects_submitted_total",
	"Project submissions by outcome",
	["result"],
)

PROFILES_SAVED = Counter(
	"publicgoods_profiles_saved_total",
	"Profile upserts by outcome",
	["result"],
)

DONATIONS_RECORDED = Counter(
	"publicgoods_donations_total",
	"Donation rows recorded",
	["payment_method", "anonymous"],
)

UPLOADS = Counter(
	"publicgoods_uploads_total",
	"Image uploads by bucket and outcome",
	["bucket", "result"],
)

SUMMARIES = Counter(
	"publicgoods_summaries_total",
	"AI summary generation attempts by outcome",
	["result"],
)

AUTH_EVENTS = Counter(
	"publicgoods_auth_events_total",
	"Identity events",
	["event", "result"],
)


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_search_query(entity: str, *, filtered: bool) -> None:
	SEARCH_QUERIES.labels(entity=entity, mode="filtered" if filtered else "all").inc()


def observe_search_latency(entity: str, elapsed_seconds: float) -> None:
	SEARCH_LATENCY.labels(entity=entity).observe(elapsed_seconds)


def inc_search_error(entity: str) -> None:
	SEARCH_ERRORS.labels(entity=entity).inc()


def inc_project_submitted(result: str) -> None:
	PROJECTS_SUBMITTED.labels(result=result).inc()


def inc_profile_saved(result: str) -> None:
	PROFILES_SAVED.labels(result=result).inc()


def inc_donation(payment_method: str, *, anonymous: bool) -> None:
	DONATIONS_RECORDED.labels(payment_method=payment_method, anonymous=str(anonymous).lower()).inc()


def inc_upload(bucket: str, result: str) -> None:
	UPLOADS.labels(bucket=bucket, result=result).inc()


def inc_summary(result: str) -> None:
	SUMMARIES.labels(result=result).inc()


def inc_auth_event(event: str, result: str) -> None:
	AUTH_EVENTS.labels(event=event, result=result).inc()


DEPENDENCY_UP = Gauge(
	"publicgoods_dependency_up",
	"1 when the last readiness probe reached the dependency",
	["dependency"],
)


def mark_dependency(name: str, ok: bool) -> None:
	DEPENDENCY_UP.labels(dependency=name).set(1 if ok else 0)
