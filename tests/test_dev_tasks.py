from apps.base.dev.fake import FakeDataGenerator
from models.talk import TALK_CATEGORIES, TALK_LEVELS, TALK_TYPES, Talk
from models.user import User


def test_fake_data(db):
    users = FakeDataGenerator().run(user_count=3, talks_per_user=2)

    assert len(users) == 3
    for user in users:
        talks = user.talks.all()
        assert len(talks) == 2
        for talk in talks:
            assert talk.type in dict(TALK_TYPES)
            assert talk.level in dict(TALK_LEVELS)
            assert talk.category in dict(TALK_CATEGORIES)
            assert 0 < len(talk.title) <= 100


def test_cli_commands(app, db):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["dev", "createdb"])
    assert result.exit_code == 0, result.output
    assert "Created tables" in result.output

    users_before = User.query.count()
    talks_before = Talk.query.count()
    result = runner.invoke(args=["dev", "talk_data", "--users", "2", "--talks", "1"])
    assert result.exit_code == 0, result.output

    assert User.query.count() == users_before + 2
    assert Talk.query.count() == talks_before + 2
