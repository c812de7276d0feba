"""Seed data used when a collection has never been stored."""

from datetime import date, datetime, timedelta, timezone
from typing import List

from shared.schemas.content import (
    Article,
    ArticleReactions,
    BreakingNews,
    GalleryAlbum,
    PageConfig,
    Poll,
    PollOption,
    PrintEdition,
    SchoolEvent,
    SubEvent,
    SystemConfig,
    TeamMember,
    ThemeConfig,
    Video,
)


def default_system_config() -> SystemConfig:
    return SystemConfig(
        maintenance_mode=False,
        allow_guest_signup=True,
        theme=ThemeConfig(
            publication_name="THE LIGHT",
            publication_subtext="Publication",
            logo_url="https://i.imgur.com/WhsJ3hf.jpeg",
            primary_color="#FFEB3B",
            accent_color="#00BCD4",
        ),
        breaking_news=BreakingNews(
            enabled=True,
            text="CLASSES SUSPENDED: Due to severe weather conditions, all classes are suspended for tomorrow, Oct 25.",
            link="/category/news",
            bg_color="#DC2626",
            text_color="#FFFFFF",
            speed="normal",
        ),
    )


def default_pages() -> List[PageConfig]:
    rows = [
        ("Editorial", "editorial", "category", "Opinions and official stances.", True),
        ("News", "news", "category", "Latest happenings around campus.", True),
        ("Features", "features", "category", "Deep dives and stories.", True),
        ("Sports", "sports", "category", "Athletics updates.", True),
        ("Sci-Tech", "sci-tech", "category", "Science and Technology.", False),
        ("Literary", "literary", "category", "Poems and Stories.", False),
        ("Gallery", "gallery", "static", "Photo collections.", True),
        ("Videos", "videos", "static", "Video library.", True),
        ("Events", "events", "static", "School calendar.", True),
        ("About", "about", "static", "About the publication.", True),
        ("Contact", "contact", "static", "Contact us.", True),
    ]
    return [
        PageConfig(
            id=str(idx),
            title=title,
            slug=slug,
            type=page_type,
            description=description,
            is_system=is_system,
            is_visible=True,
            access_level="public",
            order_score=idx,
        )
        for idx, (title, slug, page_type, description, is_system) in enumerate(rows, start=1)
    ]


def default_articles() -> List[Article]:
    now = datetime.now(timezone.utc)
    return [
        Article(
            id="101",
            title="The Light Shines Brighter: Annual Journalism Press Conference",
            slug="light-shines-brighter",
            excerpt="Our team took home 5 gold medals in this years regional press conference.",
            content=(
                "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod tempor "
                "incididunt ut labore et dolore magna aliqua.\n\nDuis aute irure dolor in "
                "reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur."
            ),
            author_id="4",
            author_name="Jimmy Pen",
            category_slug="news",
            image_url="https://picsum.photos/800/600?random=1",
            published_at=now,
            status="published",
            views=120,
            reactions=ArticleReactions(like=15, love=5, insightful=2, sad=0),
            is_featured=True,
        ),
        Article(
            id="102",
            title="Why We Need Longer Breaks",
            slug="why-we-need-longer-breaks",
            excerpt="An analysis on student productivity and rest periods.",
            content=(
                "The students have spoken, and the data shows a clear correlation between rest "
                "and performance. This is exclusive content that goes deep into the psychology of rest."
            ),
            author_id="2",
            author_name="Jane EIC",
            category_slug="editorial",
            image_url="https://picsum.photos/800/600?random=2",
            published_at=now - timedelta(days=1),
            status="published",
            views=85,
            reactions=ArticleReactions(like=10, love=20, insightful=45, sad=1),
            is_member_only=True,
        ),
        Article(
            id="103",
            title="Varsity Team Qualifies for Finals",
            slug="varsity-finals",
            excerpt="The basketball team secured a thriller victory yesterday.",
            content="Excepteur sint occaecat cupidatat non proident.\n\nWatch the highlights below!",
            author_id="4",
            author_name="Jimmy Pen",
            category_slug="sports",
            image_url="https://picsum.photos/800/600?random=3",
            video_url="https://www.youtube.com/embed/dQw4w9WgXcQ",
            published_at=now - timedelta(days=2),
            status="published",
            views=200,
            reactions=ArticleReactions(like=50, love=10, insightful=2, sad=0),
        ),
        Article(
            id="104",
            title="New Science Lab Equipment Arrives",
            slug="new-science-lab",
            excerpt="The school has invested in state-of-the-art microscopes and chemistry sets.",
            content=(
                "The science department is thrilled to announce the arrival of new equipment. "
                'This upgrade will allow students to perform more advanced experiments. "It is a '
                'game changer," says Mr. Alchemist.'
            ),
            author_id="4",
            author_name="Jimmy Pen",
            category_slug="sci-tech",
            image_url="https://picsum.photos/800/600?random=4",
            published_at=now - timedelta(seconds=200000),
            status="published",
            views=56,
            reactions=ArticleReactions(like=5, love=1, insightful=12, sad=0),
        ),
        Article(
            id="201",
            title="Draft: Canteen Prices Rising",
            slug="draft-canteen-prices",
            excerpt="Students are complaining about the recent price hike.",
            content="Prices for meals have gone up by 20%. We investigate why.",
            author_id="4",
            author_name="Jimmy Pen",
            category_slug="news",
            image_url="https://picsum.photos/800/600?random=50",
            published_at=now,
            status="draft",
        ),
        Article(
            id="202",
            title="Pending: Interview with the Principal",
            slug="pending-principal-interview",
            excerpt="We sat down with Dr. Smith to discuss the new policies.",
            content="Dr. Smith emphasized the importance of discipline and academic excellence.",
            author_id="4",
            author_name="Jimmy Pen",
            category_slug="features",
            image_url="https://picsum.photos/800/600?random=51",
            published_at=now,
            status="pending",
            is_member_only=True,
        ),
    ]


def default_events() -> List[SchoolEvent]:
    return [
        SchoolEvent(
            id="1",
            title="Foundation Week: Day 1",
            date=date(2024, 3, 15),
            location="University Grounds",
            category="General",
            description="The start of our university week celebration.",
            image_url="https://picsum.photos/600/400?random=90",
            sub_events=[
                SubEvent(id="s1", time="07:30 AM", title="Grand Parade", location="Oval"),
                SubEvent(id="s2", time="09:00 AM", title="Opening Ceremony", location="Gymnasium"),
                SubEvent(id="s3", time="01:00 PM", title="Food Bazaar Opening", location="Quadrangle"),
            ],
        ),
        SchoolEvent(
            id="2",
            title="Science Fair Judging",
            date=date(2024, 3, 15),
            location="Science Lab",
            category="Academic",
            description="Showcase of student innovation.",
        ),
        SchoolEvent(
            id="3",
            title="Varsity Finals vs Rivals",
            date=date(2024, 3, 20),
            location="City Arena",
            category="Sports",
            description="Championship game.",
            image_url="https://picsum.photos/600/400?random=91",
        ),
        SchoolEvent(
            id="4",
            title="Spring Concert",
            date=date(2024, 4, 5),
            location="Auditorium",
            category="Arts",
            status="cancelled",
            description="Featuring the school choir and band.",
            image_url="https://picsum.photos/600/400?random=92",
        ),
    ]


def default_poll() -> Poll:
    return Poll(
        id="poll-1",
        question="What is the most anticipated event this semester?",
        total_votes=142,
        options=[
            PollOption(id="opt-1", text="Intramurals", votes=85),
            PollOption(id="opt-2", text="Science Fair", votes=20),
            PollOption(id="opt-3", text="School Concert", votes=37),
        ],
    )


PRINT_EDITIONS = [
    PrintEdition(
        id="1",
        title="The Light: Volume 24",
        cover_url="https://picsum.photos/400/600?random=10",
        pdf_url="https://www.w3.org/WAI/ER/tests/xhtml/testfiles/resources/pdf/dummy.pdf",
        publish_date=date(2023, 12, 1),
        volume="Vol. 24 Issue 2",
    ),
]

TEAM_MEMBERS = [
    TeamMember(id="1", name="Dr. Alan Grant", role="Faculty Adviser", bio="Guiding students in ethical journalism.", avatar_url="https://i.pravatar.cc/150?u=grant", email="grant@light.edu"),
    TeamMember(id="2", name="Jane EIC", role="Editor-in-Chief", bio="Senior student passionate about truth and storytelling.", avatar_url="https://i.pravatar.cc/150?u=eic", email="eic@light.edu"),
    TeamMember(id="3", name="John Head", role="Sports Editor", bio="Capturing the thrill of the game.", avatar_url="https://i.pravatar.cc/150?u=head", email="head@light.edu"),
    TeamMember(id="4", name="Jimmy Pen", role="Senior Journalist", bio="Aspiring writer and coffee enthusiast.", avatar_url="https://i.pravatar.cc/150?u=writer", email="writer@light.edu"),
    TeamMember(id="5", name="Alice Lens", role="Head Photographer", bio="Visualizing the narrative.", avatar_url="https://i.pravatar.cc/150?u=lens"),
]

GALLERY_ALBUMS = [
    GalleryAlbum(
        id="1",
        title="Intramurals 2024",
        cover_url="https://picsum.photos/800/600?random=20",
        image_count=45,
        images=["https://picsum.photos/800/600?random=21"] * 6,
    ),
]

VIDEOS = [
    Video(
        id="1",
        title="Campus Tour 2024",
        description="A walk through our newly renovated campus.",
        thumbnail_url="https://picsum.photos/800/450?random=30",
        video_url="https://www.youtube.com/embed/dQw4w9WgXcQ",
        category="Features",
        published_at=date(2023, 10, 15),
    ),
]
