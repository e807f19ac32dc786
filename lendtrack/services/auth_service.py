from werkzeug.security import generate_password_hash, check_password_hash
from flask import current_app
from flask_jwt_extended import create_access_token
from lendtrack.models.user import User
from lendtrack.repositories.user_repo import UserRepo
from lendtrack.utils.errors import ValidationError

ROLES = ("admin", "staff")


class AuthService:
    @staticmethod
    def register(username: str, email: str, password: str, role: str = "staff"):
        if role not in ROLES:
            raise ValidationError("role must be admin or staff")
        if UserRepo.get_by_username(username) or UserRepo.get_by_email(email):
            raise ValidationError("Username or email already registered")

        user = User(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            role=role
        )
        UserRepo.create(user)
        return user

    @staticmethod
    def first_account() -> bool:
        return UserRepo.count() == 0

    @staticmethod
    def bootstrap_admin(username: str, email: str, password: str):
        """
        First account becomes admin. The count check and the insert are two
        statements, so two racing sign-ups can both get here; only the lowest
        id keeps the admin role.
        """
        user = AuthService.register(username, email, password, role="admin")
        if UserRepo.first_id() != user.id:
            user.role = "staff"
            UserRepo.commit()
            current_app.logger.warning(f"[auth] {username} lost the first-admin race, registered as staff")
        return user

    @staticmethod
    def token_for(user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "username": user.username}
        )

    @staticmethod
    def login(username: str, password: str):
        user = UserRepo.get_by_username(username)
        if not user or not check_password_hash(user.password_hash, password):
            raise ValidationError("Invalid username or password")
        return AuthService.token_for(user), user
