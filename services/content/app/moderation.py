"""Reader reports against articles and how editors act on them."""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from services.content.app.exceptions import InvalidTransitionError, ValidationError
from services.content.app.metrics import REPORTS_SUBMITTED
from services.content.app.repositories.articles import ArticleRepository
from services.content.app.repositories.notifications import NotificationRepository
from services.content.app.repositories.reports import ReportRepository
from shared.app_logging.logger import get_logger
from shared.schemas.content import ArticleReport

logger = get_logger(__name__)


def _close(status: str):
    def change(report: ArticleReport) -> None:
        if report.status != "open":
            raise InvalidTransitionError(f"Report is already {report.status}.")
        report.status = status

    return change


class ModerationDesk:
    def __init__(
        self,
        reports: ReportRepository,
        articles: ArticleRepository,
        notifications: NotificationRepository,
    ):
        self.reports = reports
        self.articles = articles
        self.notifications = notifications

    async def submit_report(
        self,
        article_id: str,
        article_title: str,
        article_slug: str,
        reason: str,
        details: Optional[str] = None,
        reporter_id: Optional[str] = None,
    ) -> ArticleReport:
        if not (reason or "").strip():
            raise ValidationError("A reason is required to report an article.")
        report = ArticleReport(
            id=str(uuid.uuid4()),
            article_id=article_id,
            article_title=article_title,
            article_slug=article_slug,
            reporter_id=reporter_id,
            reason=reason.strip(),
            details=details,
            timestamp=datetime.now(timezone.utc),
            status="open",
        )
        report = await self.reports.add(report, at_head=True)
        REPORTS_SUBMITTED.inc()
        logger.info(f"Report {report.id} filed against article {article_id}: {report.reason}")
        return report

    async def list_reports(self) -> List[ArticleReport]:
        return await self.reports.list()

    async def open_report_count(self) -> int:
        return await self.reports.open_count()

    async def dismiss_report(self, report_id: str) -> Optional[ArticleReport]:
        report = await self.reports.modify(report_id, _close("dismissed"))
        if report is not None:
            logger.info(f"Report {report_id} dismissed")
        return report

    async def notify_author_of_report(self, report_id: str, message: str) -> Optional[ArticleReport]:
        """Warn the reported article's author and resolve the report.

        The report is resolved even when its article has since been deleted;
        in that case nobody is notified.
        """
        if not (message or "").strip():
            raise ValidationError("A message for the author is required.")

        report = await self.reports.get(report_id)
        if report is None:
            return None

        resolved = await self.reports.modify(report_id, _close("resolved"))
        if resolved is None:
            return None

        article = await self.articles.get(report.article_id)
        if article is None:
            logger.warning(f"Article {report.article_id} for report {report_id} no longer exists; no one notified")
            return resolved

        await self.notifications.notify(article.author_id, message, "warning")
        logger.info(f"Report {report_id} resolved; author {article.author_id} notified")
        return resolved
