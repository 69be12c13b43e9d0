def login(client, user):
    """Log in user via the BYPASS_LOGIN URL: /login/<email>"""
    return client.get(f"/login/{user.email}")


def flashes(client):
    "The (category, message) flashes waiting in the client's session"
    with client.session_transaction() as session:
        return [tuple(f) for f in session.get("_flashes", [])]


def flash_categories(client):
    return [category for category, _ in flashes(client)]
