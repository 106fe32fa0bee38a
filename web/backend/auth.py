#!/usr/bin/env python3
"""
Bearer-token authentication backed by Firebase ID tokens.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials as firebase_credentials
from fastapi import Depends, Request

from core.config_loader import AuthConfig
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "careergenie"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity attached to a request after token verification."""
    uid: str
    email: Optional[str] = None
    email_verified: bool = False
    name: Optional[str] = None


class IdentityVerifier(ABC):
    """Turns a bearer token into an AuthenticatedUser."""

    @abstractmethod
    def verify(self, token: str) -> AuthenticatedUser:
        """
        Raises:
            AuthenticationError: If the token is invalid, expired or revoked
        """
        pass


class FirebaseIdentityVerifier(IdentityVerifier):
    """Verifies Firebase ID tokens with the Firebase Admin SDK."""

    def __init__(self, app: "firebase_admin.App", check_revoked: bool = True):
        self.app = app
        self.check_revoked = check_revoked

    @classmethod
    def from_config(cls, config: AuthConfig) -> "FirebaseIdentityVerifier":
        try:
            app = firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            if config.credentials_file:
                credential = firebase_credentials.Certificate(config.credentials_file)
            else:
                credential = firebase_credentials.ApplicationDefault()
            options = {"projectId": config.firebase_project_id} if config.firebase_project_id else None
            app = firebase_admin.initialize_app(credential, options=options, name=FIREBASE_APP_NAME)
            logger.info(f"Initialized Firebase Admin app (project: {config.firebase_project_id or 'default'})")
        return cls(app, check_revoked=config.check_revoked)

    def verify(self, token: str) -> AuthenticatedUser:
        try:
            claims = firebase_auth.verify_id_token(
                token, app=self.app, check_revoked=self.check_revoked
            )
        except firebase_auth.ExpiredIdTokenError as e:
            raise AuthenticationError("Token expired") from e
        except firebase_auth.RevokedIdTokenError as e:
            raise AuthenticationError("Token revoked") from e
        except (firebase_auth.InvalidIdTokenError, firebase_auth.UserDisabledError,
                firebase_auth.CertificateFetchError, ValueError) as e:
            raise AuthenticationError("Invalid token") from e

        return AuthenticatedUser(
            uid=claims["uid"],
            email=claims.get("email"),
            email_verified=bool(claims.get("email_verified", False)),
            name=claims.get("name"),
        )


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


def get_current_user(
    request: Request,
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> AuthenticatedUser:
    """
    FastAPI dependency that authenticates the request.

    Expects ``Authorization: Bearer <Firebase ID token>``.

    Raises:
        AuthenticationError: Mapped to HTTP 401.
    """
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        raise AuthenticationError("No token provided or invalid format")

    token = header[len("Bearer "):].strip()
    if not token:
        raise AuthenticationError("No token provided")

    user = verifier.verify(token)
    logger.debug(f"Authenticated user {user.uid}")
    return user
