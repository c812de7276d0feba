from prometheus_client import Counter

ARTICLE_STATUS_CHANGES = Counter(
    "content_article_status_changes_total",
    "Article status transitions applied by the editorial workflow",
    ["status"],
)
REPORTS_SUBMITTED = Counter(
    "content_reports_submitted_total",
    "Article reports filed by readers",
)
STORAGE_FAILURES = Counter(
    "content_storage_failures_total",
    "Collection writes that could not be persisted",
    ["collection"],
)
