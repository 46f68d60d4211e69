from misp.app import make_config, make_app
from misp.database import db
from misp.domain.orgs import Orgs
from misp.domain.people import People
from misp.domain.person_mail_orgs import PersonMailOrgs
from misp.models import *

app = make_app(make_config())
ctx = app.app_context()
ctx.push()

signing = app.signing

print(
    "\nWelcome to misp. This shell has all models and domain classes in scope, "
    "a SQLAlchemy session called db and the signing services as `signing`."
)
