from pydantic import BaseModel


class UserCreate(BaseModel):
    name: str
    email: str
    password: str


class UserLogin(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: int
    name: str | None = None
    email: str

    model_config = {
        "from_attributes": True
    }


class UserPublic(BaseModel):
    name: str | None = None
    email: str

    model_config = {
        "from_attributes": True
    }


class Message(BaseModel):
    message: str
