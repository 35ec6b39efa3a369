from socialhub.database import SessionLocal, init_db
from socialhub.auth import get_password_hash
from socialhub.hashtags import extract_hashtags, serialize_hashtags
from socialhub.models import Comment, Follow, Like, Notification, Post, User

# Create tables
init_db()

db = SessionLocal()

# Clear existing data
for model in (Notification, Like, Comment, Follow, Post, User):
    db.query(model).delete()
db.commit()

# Sample users (password for all: password123)
users = [
    User(
        email="ada@example.com",
        username="ada",
        display_name="Ada Lovelace",
        bio="Notes on the Analytical Engine",
        hashed_password=get_password_hash("password123"),
    ),
    User(
        email="grace@example.com",
        username="grace",
        display_name="Grace Hopper",
        bio="It's easier to ask forgiveness than it is to get permission.",
        hashed_password=get_password_hash("password123"),
    ),
    User(
        email="linus@example.com",
        username="linus",
        display_name="Linus",
        hashed_password=get_password_hash("password123"),
    ),
]
db.add_all(users)
db.commit()
ada, grace, linus = users

# Sample posts
post_contents = [
    (ada, "First program published today #math #computing"),
    (grace, "Found an actual bug in the relay #debugging #Computing"),
    (linus, "Just a hobby, won't be big and professional #opensource"),
    (grace, "A ship in port is safe, but that's not what ships are built for #advice"),
]
posts = []
for author, content in post_contents:
    hashtags = extract_hashtags(content)
    posts.append(Post(
        author_id=author.id,
        content=content,
        hashtags=serialize_hashtags(hashtags) if hashtags else None,
    ))
db.add_all(posts)
db.commit()

# Follows, likes and comments
db.add_all([
    Follow(follower_id=ada.id, following_id=grace.id),
    Follow(follower_id=linus.id, following_id=grace.id),
    Follow(follower_id=grace.id, following_id=ada.id),
    Like(user_id=grace.id, post_id=posts[0].id),
    Like(user_id=linus.id, post_id=posts[1].id),
    Comment(user_id=ada.id, post_id=posts[1].id, content="Best bug report ever."),
    Notification(user_id=grace.id, type="LIKE", message="Linus liked your post"),
    Notification(user_id=ada.id, type="LIKE", message="Grace Hopper liked your post"),
    Notification(user_id=grace.id, type="COMMENT", message="Ada Lovelace commented on your post"),
])
db.commit()

print("Database seeded successfully!")
print(f"  - {len(users)} users")
print(f"  - {len(posts)} posts")
print("  - Follows, likes, comments and notifications created")

db.close()
