"""User accounts stored in the document database."""

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pymongo.errors import PyMongoError

from .auth import hash_password
from .exceptions import NotFoundError, UpstreamUnavailable, ValidationError
from .logger import get_logger

logger = get_logger("users")

VALID_ROLES = ("admin", "agent", "operator", "user")
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72

# role -> (field, prefix) for sequential codes: AG0001, OP0001
ROLE_CODES = {
    "agent": ("agentCode", "AG"),
    "operator": ("operatorCode", "OP"),
}


class SignupRequest(BaseModel):
    """Signup payload. Fields are optional so validation errors map to 400."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None

    def validated(self) -> "SignupRequest":
        """Check required fields, password length and role.

        Raises:
            ValidationError: First rule that fails
        """
        if not self.name or not self.email or not self.password:
            raise ValidationError("Name, email, and password are required")

        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        if len(self.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password too long (max {MAX_PASSWORD_BYTES} bytes)")

        if (self.role or "user") not in VALID_ROLES:
            raise ValidationError("Invalid role", details={"allowed": list(VALID_ROLES)})

        return self


class UserProfile(BaseModel):
    """Sanitized user view (never carries the password)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    agent_code: Optional[str] = Field(default=None, alias="agentCode")
    operator_code: Optional[str] = Field(default=None, alias="operatorCode")
    is_email_verified: Optional[bool] = Field(default=None, alias="isEmailVerified")

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "UserProfile":
        data = {k: v for k, v in doc.items() if k not in ("_id", "id", "password")}
        return cls(id=str(doc["_id"]), **data)


class UserStore:
    """Reads and creates user documents.

    Example:
        >>> store = UserStore(db["users"])
        >>> profile = await store.get_active_profile("665f...")
    """

    def __init__(self, collection):
        """Args:
        collection: Async pymongo collection holding user documents
        """
        self.collection = collection

    async def get_active_profile(self, user_id: str) -> UserProfile:
        """Resolve a user id to its sanitized profile.

        Raises:
            NotFoundError: Unknown id, malformed id or inactive account
            UpstreamUnavailable: Database error
        """
        if not ObjectId.is_valid(user_id):
            raise NotFoundError("User not found or inactive")

        try:
            user = await self.collection.find_one(
                {"_id": ObjectId(user_id)}, projection={"password": 0}
            )
        except PyMongoError as e:
            logger.error("User lookup failed", user_id=user_id, error=str(e))
            raise UpstreamUnavailable("Failed to get user", details={"reason": str(e)})

        if not user or not user.get("isActive"):
            raise NotFoundError("User not found or inactive")

        return UserProfile.from_document(user)

    async def create_user(self, request: SignupRequest) -> UserProfile:
        """Create an account after validation and duplicate checks.

        Args:
            request: Signup payload (validated here)

        Returns:
            Profile of the created user

        Raises:
            ValidationError: Invalid payload or duplicate email/phone
            UpstreamUnavailable: Database error
        """
        request.validated()
        email = request.email.strip().lower()
        role = request.role or "user"

        duplicate_query: list[dict[str, Any]] = [{"email": email}]
        if request.phone:
            duplicate_query.append({"phone": request.phone})

        try:
            existing = await self.collection.find_one({"$or": duplicate_query})
            if existing:
                raise ValidationError("User with this email or phone already exists")

            now = datetime.now(timezone.utc)
            document: dict[str, Any] = {
                "name": request.name,
                "email": email,
                "password": hash_password(request.password),
                "role": role,
                "isActive": True,
                "isEmailVerified": False,
                "createdAt": now,
                "updatedAt": now,
            }
            if request.phone:
                document["phone"] = request.phone

            if role in ROLE_CODES:
                field_name, prefix = ROLE_CODES[role]
                count = await self.collection.count_documents({"role": role})
                document[field_name] = f"{prefix}{count + 1:04d}"

            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error("Signup failed", email=email, error=str(e))
            raise UpstreamUnavailable("Failed to create user", details={"reason": str(e)})

        document["_id"] = result.inserted_id
        logger.info("User created", role=role, user_id=str(result.inserted_id))
        return UserProfile.from_document(document)
