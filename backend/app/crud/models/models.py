from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime

Base = declarative_base()


class User(Base):
    __tablename__ = 'Users'

    userId = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nickname = Column(String, nullable=False, unique=True)
    createdAt = Column(DateTime, default=datetime.utcnow, nullable=False)
    updatedAt = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    posts = relationship("Post", back_populates="author", passive_deletes=True)
    comments = relationship("Comment", back_populates="user", passive_deletes=True)
    likes = relationship("Like", back_populates="user", foreign_keys="Like.UserId", passive_deletes=True)


class Post(Base):
    __tablename__ = 'Posts'

    postId = Column(Integer, primary_key=True, index=True, autoincrement=True)
    UserId = Column(Integer, ForeignKey('Users.userId', ondelete='CASCADE'), nullable=False)
    nickname = Column(String, nullable=False)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    createdAt = Column(DateTime, default=datetime.utcnow, nullable=False)
    updatedAt = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    author = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", passive_deletes=True)
    post_likes = relationship("Like", back_populates="post", passive_deletes=True)


class Comment(Base):
    __tablename__ = 'Comments'

    commentId = Column(Integer, primary_key=True, index=True, autoincrement=True)
    UserId = Column(Integer, ForeignKey('Users.userId', ondelete='CASCADE'), nullable=False)
    PostId = Column(Integer, ForeignKey('Posts.postId', ondelete='CASCADE'), nullable=False)
    content = Column(Text, nullable=False)
    createdAt = Column(DateTime, default=datetime.utcnow, nullable=False)
    updatedAt = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    post = relationship("Post", back_populates="comments")
    user = relationship("User", back_populates="comments")


class Like(Base):
    __tablename__ = 'Likes'

    likeId = Column(Integer, primary_key=True, index=True, autoincrement=True)
    UserId = Column(Integer, ForeignKey('Users.userId', ondelete='CASCADE'), nullable=False)
    PostId = Column(Integer, ForeignKey('Posts.postId', ondelete='CASCADE'), nullable=False)
    Nickname = Column(
        String,
        ForeignKey('Users.nickname', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
    )
    createdAt = Column(DateTime, default=datetime.utcnow, nullable=False)

    post = relationship("Post", back_populates="post_likes")
    user = relationship("User", back_populates="likes", foreign_keys=[UserId])

    # 한 사용자는 한 게시글에 좋아요를 한 번만 누를 수 있음
    __table_args__ = (
        UniqueConstraint('UserId', 'PostId', name='unique_user_post_like'),
    )
