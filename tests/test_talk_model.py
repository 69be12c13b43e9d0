import pytest

from models.talk import Talk, TalkOwnershipException, TalkStore, can_edit


TALK_DATA = {
    "title": "Edit Action Talk",
    "description": "This is a longer description of a talk",
    "type": "regular",
    "level": "mid",
    "category": "testing",
}


@pytest.fixture
def store(db):
    return TalkStore(db.session)


def test_only_the_owner_can_edit(store, user, other_user):
    talk = store.find(store.create(dict(TALK_DATA, user_id=user.id)))

    assert can_edit(talk, user.id)
    assert not can_edit(talk, other_user.id)
    assert not can_edit(talk, None)


def test_owner_cannot_be_reassigned(store, user, other_user):
    talk = store.find(store.create(dict(TALK_DATA, user_id=user.id)))

    with pytest.raises(TalkOwnershipException):
        talk.user_id = other_user.id

    # Setting it to the same owner is harmless
    talk.user_id = user.id
    assert talk.user_id == user.id


def test_store_assigns_ids(store, user):
    first = store.create(dict(TALK_DATA, user_id=user.id))
    second = store.create(dict(TALK_DATA, user_id=user.id))

    assert first != second
    assert store.find(first).title == TALK_DATA["title"]
    assert store.find(second).user == user


def test_store_update_leaves_owner_alone(store, user, other_user):
    talk_id = store.create(dict(TALK_DATA, user_id=user.id))

    assert store.update(talk_id, {"title": "A new title", "user_id": other_user.id})

    talk = store.find(talk_id)
    assert talk.title == "A new title"
    assert talk.description == TALK_DATA["description"]
    assert talk.user_id == user.id


def test_store_missing_talk(store):
    assert store.find(999999) is None
    assert store.update(999999, {"title": "Nope"}) is False


def test_stored_text_is_not_escaped(store, user):
    talk_id = store.create(
        dict(
            TALK_DATA,
            title="Rock & Roll <Testing>",
            description='"Quotes" & ampersands',
            user_id=user.id,
        )
    )

    talk = store.find(talk_id)
    assert talk.title == "Rock & Roll <Testing>"
    assert talk.description == '"Quotes" & ampersands'


def test_human_labels(user):
    talk = Talk(user_id=user.id, type="tutorial", level="mid", category="uiux")

    assert talk.human_type == "Tutorial"
    assert talk.human_level == "Mid-level"
    assert talk.human_category == "UI/UX"

    # Unknown values are shown as they are
    talk.level = "Expert"
    assert talk.human_level == "Expert"
