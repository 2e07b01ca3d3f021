"""Shared test fixtures."""

import pytest
from django.db.models.signals import post_save

from django_rehive_cloner.cloner import Cloner

from tests.models import Article, ArticleTag, Author, Paragraph, Section, Tag
from tests.utils import RecordingAttachmentAdapter, RecordingPublisher


@pytest.fixture
def log():
    return []


@pytest.fixture
def publisher(log):
    return RecordingPublisher(log)


@pytest.fixture
def attachment():
    return RecordingAttachmentAdapter()


@pytest.fixture
def cloner(attachment, publisher):
    return Cloner(attachment=attachment, events=publisher)


@pytest.fixture
def save_log(log):
    """Record every model save in the shared log."""

    def receiver(sender, instance, created, **kwargs):
        log.append("save: {} {}".format(
            sender._meta.label, "created" if created else "updated"
        ))

    post_save.connect(receiver, weak=False, dispatch_uid='test_save_log')
    yield log
    post_save.disconnect(dispatch_uid='test_save_log')


@pytest.fixture
def author():
    return Author.objects.create(name="Ada")


@pytest.fixture
def tags():
    return [Tag.objects.create(name="python"), Tag.objects.create(name="django")]


@pytest.fixture
def article(author, tags):
    article = Article.objects.create(
        title="Cloning",
        body="All about cloning.",
        secret="hunter2",
        sections_count=2,
        image="articles/cover.png",
        author=author,
    )

    ArticleTag.objects.create(article=article, tag=tags[0], weight=1, note="a")
    ArticleTag.objects.create(article=article, tag=tags[1], weight=2, note="b")

    for position in range(2):
        section = Section.objects.create(
            article=article,
            heading="Section {}".format(position),
            position=position
        )
        Paragraph.objects.create(section=section, text="First")
        Paragraph.objects.create(section=section, text="Second")

    return article
