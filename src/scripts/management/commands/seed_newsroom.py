"""Seed categories, SEO defaults, demo users with roles, and sample articles."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from access_control.models import Role
from access_control.repositories import RoleRepository
from articles.models import Article, ArticleStatus
from articles.slugs import generate_slug
from authentication.managers import UserManager
from authentication.models import Profile
from categories.models import Category
from seo.models import DEFAULT_SEO_SETTINGS, SEOSetting

SEED_CATEGORIES = [
    ("politics", "राजनीति", "bg-primary"),
    ("sports", "खेल", "bg-success"),
    ("entertainment", "मनोरंजन", "bg-secondary"),
    ("national", "देश", "bg-accent"),
    ("international", "विदेश", "bg-primary"),
    ("business", "व्यापार", "bg-warning"),
    ("technology", "तकनीक", "bg-accent"),
    ("health", "स्वास्थ्य", "bg-success"),
]

# email, password, display name, role
SEED_USERS = [
    ("admin@example.com", "adminpass", "Admin", Role.ADMIN),
    ("editor@example.com", "editorpass", "Editor", Role.EDITOR),
    ("reader@example.com", "readerpass", "Reader", Role.USER),
]

SAMPLE_ARTICLES = [
    ("editor@example.com", "संसद का शीतकालीन सत्र शुरू", "politics", ArticleStatus.PUBLISHED, True, False),
    ("admin@example.com", "क्रिकेट विश्व कप की तैयारियां तेज़", "sports", ArticleStatus.PUBLISHED, False, True),
    ("editor@example.com", "नई तकनीक नीति का मसौदा", "technology", ArticleStatus.PENDING_REVIEW, False, False),
    ("editor@example.com", "स्वास्थ्य बजट पर चर्चा", "health", ArticleStatus.DRAFT, False, False),
]


def create_seed_categories() -> dict[str, Category]:
    """Create the default categories if missing; existing rows are left as they are."""
    categories = {}
    for order, (name, label, color) in enumerate(SEED_CATEGORIES):
        category, _ = Category.objects.get_or_create(
            name=name, defaults={"label": label, "color": color, "sort_order": order}
        )
        categories[name] = category
    return categories


def create_seed_seo_settings() -> None:
    for key, value in DEFAULT_SEO_SETTINGS.items():
        SEOSetting.objects.get_or_create(setting_key=key, defaults={"setting_value": value})


def create_seed_users() -> dict[str, object]:
    """Create the demo users, their profiles and role rows."""
    User = get_user_model()
    roles = RoleRepository()
    users = {}
    for email, password, display_name, role in SEED_USERS:
        user, _ = User.objects.get_or_create(
            email=email,
            defaults={
                "password_hash": UserManager.hash_password(password),
                "is_staff": role == Role.ADMIN,
                "is_superuser": role == Role.ADMIN,
            },
        )
        Profile.objects.get_or_create(user=user, defaults={"display_name": display_name})
        if role != Role.USER:
            roles.assign(user.id, role)
        users[email] = user
    return users


def create_sample_articles(users: dict[str, object]) -> list[Article]:
    articles = []
    now = timezone.now()
    for email, title, category, status, breaking, featured in SAMPLE_ARTICLES:
        author = users[email]
        article = Article.objects.filter(title=title, author=author).first()
        if article is None:
            article = Article.objects.create(
                title=title,
                slug=generate_slug(title),
                excerpt=title,
                content=f"{title}। विस्तृत समाचार जल्द ही।",
                category=category,
                status=status,
                is_breaking=breaking,
                is_featured=featured,
                author=author,
                published_at=now if status == ArticleStatus.PUBLISHED else None,
            )
        articles.append(article)
    return articles


class Command(BaseCommand):
    help = (
        "Seed default categories, SEO settings, demo admin/editor/reader users and "
        "sample articles. Use --reset to clear previously seeded demo data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the demo users (and their articles and roles) before seeding.",
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            if options.get("reset"):
                self._reset_seeded_data()

            self.stdout.write("Seeding newsroom data...")
            create_seed_categories()
            create_seed_seo_settings()
            users = create_seed_users()
            articles = create_sample_articles(users)
        self.stdout.write(self.style.SUCCESS(f"Seed completed ({len(articles)} sample articles)."))

    def _reset_seeded_data(self) -> None:
        """Remove demo users with their articles; categories and SEO rows are kept."""
        self.stdout.write("Resetting previously seeded demo data...")
        User = get_user_model()
        demo_emails = [email for email, *_ in SEED_USERS]
        Article.objects.filter(author__email__in=demo_emails).delete()
        User.objects.filter(email__in=demo_emails).delete()
        self.stdout.write(self.style.WARNING("Seeded demo data cleared."))
