import pytest

from django_rehive_cloner.mixins import DefaultCloneable, get_cloneable

from tests.models import Article, Author, Paragraph


def test_get_clone_exempt_attributes_includes_declared():
    exempt = Article().get_clone_exempt_attributes()

    assert {'id', 'created', 'updated', 'secret'} <= set(exempt)
    assert exempt[-1] == 'secret'


def test_defaults_without_declarations():
    author = Author(name="Ada")

    assert author.get_cloneable_file_attributes() == []
    assert author.get_cloneable_relations() == []
    assert 'name' not in author.get_clone_exempt_attributes()


def test_add_cloneable_relation_is_unique():
    article = Article()

    article.add_cloneable_relation('summary')
    article.add_cloneable_relation('summary')
    article.add_cloneable_relation('tags')

    assert article.get_cloneable_relations() == [
        'author', 'tags', 'sections', 'summary'
    ]


def test_add_cloneable_relation_only_affects_instance():
    Article().add_cloneable_relation('summary')

    assert Article.cloneable_relations == ['author', 'tags', 'sections']
    assert Article().get_cloneable_relations() == [
        'author', 'tags', 'sections'
    ]


def test_get_cloneable_for_mixin_instance():
    article = Article()

    assert get_cloneable(article) is article


def test_get_cloneable_for_plain_model():
    paragraph = Paragraph(text="Plain")

    cloneable = get_cloneable(paragraph)

    assert isinstance(cloneable, DefaultCloneable)
    assert cloneable.get_clone_exempt_attributes() == ['id']
    assert cloneable.get_cloneable_file_attributes() == []
    assert cloneable.get_cloneable_relations() == []
    assert cloneable.on_cloning(paragraph, child=True) is None
    assert cloneable.on_cloned(paragraph) is None


@pytest.mark.django_db
def test_duplicate_helpers_use_given_cloner(cloner, author):
    clone = author.duplicate(cloner)

    assert clone.pk != author.pk
    assert Author.objects.count() == 2


@pytest.mark.django_db(databases=['default', 'other'])
def test_duplicate_to_helper_uses_given_cloner(cloner, author):
    clone = author.duplicate_to(cloner, 'other')

    assert Author.objects.using('other').get(pk=clone.pk).name == "Ada"
