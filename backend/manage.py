from diaries import create_app, db
from diaries.models import User # Make sure to import your models

# Create an app instance; this also creates the bootstrap admin if none exists
app = create_app()

# The 'app_context' is needed for SQLAlchemy to know which app it's working with
with app.app_context():
    print("Creating all database tables...")
    db.create_all()
    print(f"Admin accounts: {User.query.filter_by(role='admin').count()}")
    print("Done!")
