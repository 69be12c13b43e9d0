import random
from faker import Faker

from main import db
from models.user import User
from models.talk import Talk, TALK_CATEGORIES, TALK_LEVELS, TALK_TYPES


def randombool(probability):
    return random.random() < probability


def fake_talk(fake, user):
    talk = Talk(user_id=user.id)
    talk.title = fake.sentence(nb_words=6, variable_nb_words=True)[:100]
    talk.description = fake.text(max_nb_chars=500)
    talk.type = random.choice(TALK_TYPES)[0]
    talk.level = random.choice(TALK_LEVELS)[0]
    talk.category = random.choice(TALK_CATEGORIES)[0]
    talk.desired = randombool(0.2)

    if randombool(0.5):
        talk.slides = fake.url()
    if randombool(0.2):
        talk.other = fake.text(max_nb_chars=200)
    if randombool(0.1):
        talk.sponsor = fake.company()

    return talk


class FakeDataGenerator:
    def __init__(self):
        self.fake = Faker("en_GB")

    def run(self, user_count=5, talks_per_user=2):
        users = []
        for _ in range(user_count):
            email = self.fake.unique.safe_email()
            while User.does_user_exist(email):
                email = self.fake.unique.safe_email()

            user = User(email, self.fake.name())
            db.session.add(user)
            users.append(user)

        db.session.commit()

        for user in users:
            for _ in range(talks_per_user):
                db.session.add(fake_talk(self.fake, user))

        db.session.commit()
        return users
