from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Header, Query, Request, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from services.content.app.container import ContentService
from services.content.app.exceptions import AuthenticationError, ContentError, NotFoundError, ValidationError
from services.content.app.schema import (
    ActivityIn,
    AssistantIn,
    AssistantOut,
    AuthorNotice,
    BookmarksIn,
    CommentIn,
    ContactIn,
    LoginIn,
    ReactionIn,
    ReportIn,
    RescheduleIn,
    StatusChange,
    SubscribeIn,
    SubscribeOut,
    UnreadCount,
    VoteIn,
)
from shared.app_logging.logger import (
    CorrelationContext,
    generate_correlation_id,
    log_error_with_context,
    setup_logging,
)
from shared.config.settings import get_settings
from shared.schemas.content import (
    AccessLog,
    Article,
    ArticleDraft,
    ArticleReactions,
    ArticleReport,
    Comment,
    ContactMessage,
    GalleryAlbum,
    Notification,
    PageConfig,
    PageUpdate,
    Poll,
    PrintEdition,
    SchoolEvent,
    SearchResult,
    SystemConfig,
    SystemConfigUpdate,
    TeamMember,
    User,
    Video,
)
from shared.utils.health import create_content_health_checker
from shared.utils.redis_client import close_all_redis_clients, get_redis_client

# Setup logging
logger = setup_logging("content")

# Get configuration
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    redis_client = get_redis_client("content")
    if not await redis_client.ping():
        logger.warning("Redis is not reachable; requests will fail with 503 until it comes back")
    app.state.content = ContentService(redis_client, settings)
    app.state.health_checker = create_content_health_checker(redis_client)
    logger.info("Content service started")
    try:
        yield
    finally:
        await close_all_redis_clients()
        logger.info("Redis connections closed")


app = FastAPI(
    title="The Light Content Service",
    description="Articles, editorial workflow, moderation and site configuration for The Light.",
    lifespan=lifespan,
)


@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID") or generate_correlation_id()
    with CorrelationContext(correlation_id):
        response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id
    return response


@app.exception_handler(ContentError)
async def content_error_handler(request: Request, exc: ContentError):
    if exc.code >= 500:
        log_error_with_context(logger, exc, {"path": request.url.path})
    else:
        logger.info(f"{request.method} {request.url.path} refused ({exc.code}): {exc.message}")
    return JSONResponse(status_code=exc.code, content=exc.to_dict())


def get_service(request: Request) -> ContentService:
    return request.app.state.content


async def get_actor(
    x_user_id: Optional[str] = Header(None),
    service: ContentService = Depends(get_service),
) -> Optional[User]:
    """The signed-in user named by ``X-User-Id``, or ``None`` for a guest."""
    if not x_user_id:
        return None
    user = await service.get_user(x_user_id)
    if user is None:
        raise AuthenticationError("Unknown user.")
    return user


async def require_actor(actor: Optional[User] = Depends(get_actor)) -> User:
    if actor is None:
        raise AuthenticationError("Please sign in first.")
    return actor


def found(value, what: str):
    if value is None or value is False:
        raise NotFoundError(f"{what} not found.")
    return value


@app.get("/content/health")
async def health(request: Request):
    """Comprehensive health check endpoint."""
    return await request.app.state.health_checker.run_all_checks()


@app.get("/content/health/live")
def liveness_check():
    """Liveness check endpoint."""
    return {"status": "alive", "service": "content"}


@app.get("/content/health/ready")
async def readiness_check(request: Request):
    """Readiness check endpoint."""
    return await request.app.state.health_checker.readiness(["redis"])


@app.get("/content/metrics")
def metrics():
    """Prometheus metrics endpoint."""
    data = generate_latest()
    logger.debug("Metrics endpoint called.")
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


# Auth


@app.post("/content/auth/login", response_model=User)
async def login(body: LoginIn, service: ContentService = Depends(get_service)):
    return await service.login(body.email, body.school_id)


# Articles


@app.get("/content/articles", response_model=List[Article])
async def list_articles(category: Optional[str] = None, service: ContentService = Depends(get_service)):
    return await service.list_articles(category)


@app.get("/content/articles/all", response_model=List[Article])
async def list_all_articles(actor: User = Depends(require_actor), service: ContentService = Depends(get_service)):
    return await service.list_all_articles(actor)


@app.get("/content/articles/featured", response_model=List[Article])
async def list_featured_articles(service: ContentService = Depends(get_service)):
    return await service.list_featured_articles()


@app.get("/content/articles/pending", response_model=List[Article])
async def review_queue(actor: User = Depends(require_actor), service: ContentService = Depends(get_service)):
    return await service.list_pending_articles(actor)


@app.get("/content/articles/mine", response_model=List[Article])
async def my_articles(
    include_archived: bool = False,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return await service.list_articles_by_author(actor.id, include_archived)


@app.post("/content/articles/bookmarks", response_model=List[Article])
async def bookmarked_articles(body: BookmarksIn, service: ContentService = Depends(get_service)):
    return await service.list_bookmarked_articles(body.slugs)


@app.get("/content/articles/{slug}", response_model=Article)
async def read_article(
    slug: str,
    actor: Optional[User] = Depends(get_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.read_article(slug, actor), "Article")


@app.get("/content/articles/{slug}/related", response_model=List[Article])
async def related_articles(slug: str, service: ContentService = Depends(get_service)):
    article = found(await service.get_article_by_slug(slug), "Article")
    return await service.list_related_articles(article)


@app.post("/content/articles", response_model=Article, status_code=status.HTTP_201_CREATED)
async def create_article(
    draft: ArticleDraft,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return await service.create_article(draft, actor)


@app.put("/content/articles/{article_id}", response_model=Article)
async def update_article(
    article_id: str,
    article: Article,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    if article.id != article_id:
        raise ValidationError("Article id in the body does not match the URL.")
    return found(await service.update_article(article, actor), "Article")


@app.delete("/content/articles/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    found(await service.delete_article(article_id, actor), "Article")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/content/articles/{article_id}/status", response_model=Article)
async def set_article_status(
    article_id: str,
    body: StatusChange,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.set_article_status(article_id, body.status, body.feedback, actor), "Article")


@app.post("/content/articles/{article_id}/submit", response_model=Article)
async def submit_for_review(
    article_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.submit_for_review(article_id, actor), "Article")


@app.post("/content/articles/{article_id}/archive", response_model=Article)
async def archive_article(
    article_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.archive_article(article_id, actor), "Article")


@app.post("/content/articles/{article_id}/feature", response_model=Article)
async def toggle_feature(
    article_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.toggle_feature(article_id, actor), "Article")


@app.post("/content/articles/{article_id}/reactions", response_model=ArticleReactions)
async def react(
    article_id: str,
    body: ReactionIn,
    actor: Optional[User] = Depends(get_actor),
    x_reader_id: Optional[str] = Header(None),
    service: ContentService = Depends(get_service),
):
    identity = actor.id if actor else x_reader_id
    return found(await service.react(article_id, body.reaction, identity), "Article")


# Pages


@app.get("/content/pages", response_model=List[PageConfig])
async def list_pages(service: ContentService = Depends(get_service)):
    return await service.list_pages()


@app.get("/content/pages/navigation", response_model=List[PageConfig])
async def navigation(actor: Optional[User] = Depends(get_actor), service: ContentService = Depends(get_service)):
    return await service.list_navigation(actor)


@app.post("/content/pages", response_model=PageConfig, status_code=status.HTTP_201_CREATED)
async def create_page(
    page: PageConfig,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return await service.create_page(page, actor)


@app.patch("/content/pages/{page_id}", response_model=PageConfig)
async def update_page(
    page_id: str,
    updates: PageUpdate,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.update_page(page_id, updates, actor), "Page")


@app.delete("/content/pages/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page(
    page_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    found(await service.delete_page(page_id, actor), "Page")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Moderation


@app.post("/content/reports", response_model=ArticleReport, status_code=status.HTTP_201_CREATED)
async def submit_report(
    body: ReportIn,
    actor: Optional[User] = Depends(get_actor),
    service: ContentService = Depends(get_service),
):
    return await service.submit_report(
        body.article_id,
        body.article_title,
        body.article_slug,
        body.reason,
        body.details,
        actor.id if actor else None,
    )


@app.get("/content/reports", response_model=List[ArticleReport])
async def list_reports(actor: User = Depends(require_actor), service: ContentService = Depends(get_service)):
    return await service.list_reports(actor)


@app.post("/content/reports/{report_id}/dismiss", response_model=ArticleReport)
async def dismiss_report(
    report_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.dismiss_report(report_id, actor), "Report")


@app.post("/content/reports/{report_id}/notify", response_model=ArticleReport)
async def notify_author_of_report(
    report_id: str,
    body: AuthorNotice,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.notify_author_of_report(report_id, body.message, actor), "Report")


# System configuration


@app.get("/content/config", response_model=SystemConfig)
async def get_system_config(service: ContentService = Depends(get_service)):
    return await service.get_system_config()


@app.patch("/content/config", response_model=SystemConfig)
async def update_system_config(
    updates: SystemConfigUpdate,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return await service.update_system_config(updates, actor)


# Search and assistant


@app.get("/content/search", response_model=List[SearchResult])
async def search(
    q: str = "",
    enumerate_all: bool = Query(False, alias="all"),
    service: ContentService = Depends(get_service),
):
    return await service.search(q, enumerate_all)


@app.post("/content/assistant", response_model=AssistantOut)
async def ask_assistant(body: AssistantIn, service: ContentService = Depends(get_service)):
    return AssistantOut(reply=await service.ask_assistant(body.message))


# Access log


@app.get("/content/access-logs", response_model=List[AccessLog])
async def get_access_logs(actor: User = Depends(require_actor), service: ContentService = Depends(get_service)):
    return await service.get_access_logs(actor)


@app.post("/content/access-logs", response_model=AccessLog, status_code=status.HTTP_201_CREATED)
async def log_activity(
    body: ActivityIn,
    actor: Optional[User] = Depends(get_actor),
    service: ContentService = Depends(get_service),
):
    return await service.log_activity(body.action, body.details, actor)


# Events


@app.get("/content/events", response_model=List[SchoolEvent])
async def list_events(service: ContentService = Depends(get_service)):
    return await service.list_events()


@app.post("/content/events", response_model=SchoolEvent, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: SchoolEvent,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return await service.create_event(event, actor)


@app.put("/content/events/{event_id}", response_model=SchoolEvent)
async def update_event(
    event_id: str,
    event: SchoolEvent,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    if event.id != event_id:
        raise ValidationError("Event id in the body does not match the URL.")
    return found(await service.update_event(event, actor), "Event")


@app.delete("/content/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    found(await service.delete_event(event_id, actor), "Event")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/content/events/{event_id}/reschedule", response_model=SchoolEvent)
async def reschedule_event(
    event_id: str,
    body: RescheduleIn,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.reschedule_event(event_id, body.date, actor), "Event")


@app.post("/content/events/{event_id}/cancel", response_model=SchoolEvent)
async def cancel_event(
    event_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.cancel_event(event_id, actor), "Event")


# Comments


@app.get("/content/comments", response_model=List[Comment])
async def list_comments(article_id: Optional[str] = None, service: ContentService = Depends(get_service)):
    return await service.list_comments(article_id)


@app.post("/content/comments", response_model=Comment, status_code=status.HTTP_201_CREATED)
async def add_comment(
    body: CommentIn,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return await service.add_comment(body.article_id, body.content, actor)


@app.delete("/content/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    found(await service.delete_comment(comment_id, actor), "Comment")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Poll


@app.get("/content/poll", response_model=Poll)
async def get_active_poll(service: ContentService = Depends(get_service)):
    return await service.get_active_poll()


@app.post("/content/poll/vote", response_model=Poll)
async def vote_poll(body: VoteIn, service: ContentService = Depends(get_service)):
    return await service.vote_poll(body.poll_id, body.option_id)


# Contact and newsletter


@app.post("/content/messages", response_model=ContactMessage, status_code=status.HTTP_201_CREATED)
async def send_contact_message(body: ContactIn, service: ContentService = Depends(get_service)):
    return await service.send_contact_message(body.name, body.email, body.message)


@app.get("/content/messages", response_model=List[ContactMessage])
async def list_contact_messages(
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return await service.list_contact_messages(actor)


@app.post("/content/messages/{message_id}/read", response_model=ContactMessage)
async def mark_message_read(
    message_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    return found(await service.mark_message_read(message_id, actor), "Message")


@app.post("/content/subscribers", response_model=SubscribeOut)
async def subscribe(body: SubscribeIn, service: ContentService = Depends(get_service)):
    subscribed = await service.subscribe(body.email)
    return SubscribeOut(email=body.email.strip(), subscribed=subscribed)


@app.get("/content/subscribers", response_model=List[str])
async def list_subscribers(actor: User = Depends(require_actor), service: ContentService = Depends(get_service)):
    return await service.list_subscribers(actor)


# Notifications


@app.get("/content/notifications", response_model=List[Notification])
async def list_notifications(actor: User = Depends(require_actor), service: ContentService = Depends(get_service)):
    return await service.list_notifications(actor.id)


@app.get("/content/notifications/unread", response_model=UnreadCount)
async def unread_notifications(actor: User = Depends(require_actor), service: ContentService = Depends(get_service)):
    return UnreadCount(unread=await service.unread_notification_count(actor.id))


@app.post("/content/notifications/{notification_id}/read", response_model=Notification)
async def mark_notification_read(
    notification_id: str,
    actor: User = Depends(require_actor),
    service: ContentService = Depends(get_service),
):
    owned = {n.id for n in await service.list_notifications(actor.id)}
    if notification_id not in owned:
        raise NotFoundError("Notification not found.")
    return found(await service.mark_notification_read(notification_id), "Notification")


# Static catalog


@app.get("/content/print-editions", response_model=List[PrintEdition])
async def print_editions(service: ContentService = Depends(get_service)):
    return await service.list_print_editions()


@app.get("/content/team", response_model=List[TeamMember])
async def team_members(service: ContentService = Depends(get_service)):
    return await service.list_team_members()


@app.get("/content/gallery", response_model=List[GalleryAlbum])
async def gallery_albums(service: ContentService = Depends(get_service)):
    return await service.list_gallery_albums()


@app.get("/content/videos", response_model=List[Video])
async def videos(service: ContentService = Depends(get_service)):
    return await service.list_videos()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8006)
