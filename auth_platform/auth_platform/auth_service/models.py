from pydantic import BaseModel

DEFAULT_ROLE = "user"


class User(BaseModel):
    """A document in the users collection. `password` always holds a bcrypt hash."""

    username: str
    email: str
    password: str
    role: str = DEFAULT_ROLE

    def to_document(self) -> dict:
        return self.model_dump()

    @classmethod
    def from_document(cls, document: dict) -> "User":
        # Ignore _id and anything else the collection may carry
        return cls(
            username=document.get("username") or "",
            email=document["email"],
            password=document["password"],
            role=document.get("role") or DEFAULT_ROLE,
        )

    def token_claims(self) -> dict:
        return {"email": self.email, "role": self.role}
