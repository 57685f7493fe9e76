# app/db/models/__init__.py
from .user import User
from .user_session import UserSession
from .todo import Project, Task
