from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import AccountType, Outcome
from ..core.exceptions import ConflictError, ValidationError
from ..core.results import FlowResult
from ..auth.issuer import CredentialIssuer
from .forms import validate_login, validate_password_change, validate_profile, validate_registration
from .model import Account, IdentitySnapshot
from .passwords import PasswordHasher
from .repository import AccountRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_NOTICE = "Please check your credentials and try again."
EMAIL_EXISTS_NOTICE = "Email already exists. Please login or use a different email."


class AccountService:
    """Use cases: register, login, profile update, password change, logout.

    Every operation returns a ``FlowResult``; only unexpected store failures
    escape as exceptions.
    """

    def __init__(self, accounts: AccountRepository, hasher: PasswordHasher, issuer: CredentialIssuer):
        self._accounts = accounts
        self._hasher = hasher
        self._issuer = issuer

    def get_account(self, account_id: int) -> Optional[Account]:
        return self._accounts.get_by_id(int(account_id))

    def register(self, *, firstname: str, lastname: str, email: str, password: str) -> FlowResult:
        sticky = {"firstname": firstname or "", "lastname": lastname or "", "email": (email or "").strip()}
        try:
            values = validate_registration(firstname=firstname, lastname=lastname, email=email, password=password)
        except ValidationError as e:
            return FlowResult(Outcome.VALIDATION_FAILED, notice=str(e), errors=e.errors, values=sticky)

        sticky.update(firstname=values["firstname"], lastname=values["lastname"], email=values["email"])

        # The pre-check only saves a bcrypt round; the unique index is what actually decides.
        if self._accounts.get_by_email(values["email"]):
            logger.info("Registration rejected: email already registered")
            return FlowResult(Outcome.CONFLICT, notice=EMAIL_EXISTS_NOTICE, values=sticky)

        password_hash = self._hasher.hash(values["password"])
        try:
            account_id = self._accounts.create_account(
                firstname=values["firstname"],
                lastname=values["lastname"],
                email=values["email"],
                password_hash=password_hash,
                account_type=AccountType.CLIENT,
            )
        except ConflictError:
            logger.info("Registration lost a race on the unique email index")
            return FlowResult(Outcome.CONFLICT, notice=EMAIL_EXISTS_NOTICE, values=sticky)

        logger.info("Registered account %s", account_id)
        return FlowResult(
            Outcome.CREATED,
            notice=f"Congratulations {values['firstname']}, you are now registered. Please log in.",
            values=sticky,
            record=account_id,
        )

    def login(self, *, email: str, password: str) -> FlowResult:
        sticky = {"email": (email or "").strip()}
        try:
            values = validate_login(email=email, password=password)
        except ValidationError as e:
            return FlowResult(Outcome.VALIDATION_FAILED, notice=str(e), errors=e.errors, values=sticky)

        account = self._accounts.get_by_email(values["email"])
        # Same outcome for unknown email and wrong password.
        if account is None or not self._hasher.verify(values["password"], account.password_hash):
            return FlowResult(Outcome.INVALID_CREDENTIALS, notice=INVALID_CREDENTIALS_NOTICE, values=sticky)

        credential = self._issuer.issue(account.snapshot())
        logger.info("Account %s logged in", account.account_id)
        return FlowResult(Outcome.AUTHENTICATED, credential=credential, record=account.snapshot())

    def update_profile(
        self,
        *,
        identity: IdentitySnapshot,
        firstname: str,
        lastname: str,
        email: str,
        credential: Optional[str] = None,
    ) -> FlowResult:
        sticky = {"firstname": firstname or "", "lastname": lastname or "", "email": (email or "").strip()}
        try:
            values = validate_profile(firstname=firstname, lastname=lastname, email=email)
        except ValidationError as e:
            return FlowResult(Outcome.VALIDATION_FAILED, notice=str(e), errors=e.errors, values=sticky)

        sticky.update(values)
        current = self._accounts.get_by_id(identity.account_id)
        if current is None:
            return FlowResult(Outcome.NOT_FOUND, notice="Account update failed.", values=sticky)

        if values["email"] != current.email.lower():
            other = self._accounts.get_by_email(values["email"])
            if other is not None and other.account_id != current.account_id:
                return FlowResult(Outcome.CONFLICT, notice="Email already exists. Please use a different email.", values=sticky)

        try:
            self._accounts.update_profile(
                account_id=current.account_id,
                firstname=values["firstname"],
                lastname=values["lastname"],
                email=values["email"],
            )
        except ConflictError:
            return FlowResult(Outcome.CONFLICT, notice="Email already exists. Please use a different email.", values=sticky)

        refreshed = self._accounts.get_by_id(current.account_id)
        if refreshed is None:
            return FlowResult(Outcome.NOT_FOUND, notice="Account update failed.", values=sticky)

        fresh = self._reissue(refreshed, credential)
        return FlowResult(
            Outcome.UPDATED,
            notice="Account information successfully updated.",
            values=sticky,
            credential=fresh,
            record=refreshed.snapshot(),
        )

    def change_password(
        self,
        *,
        identity: IdentitySnapshot,
        current_password: str,
        password: str,
        confirmation: str,
        credential: Optional[str] = None,
    ) -> FlowResult:
        if (password or "") != (confirmation or ""):
            return FlowResult(Outcome.MISMATCH, notice="Passwords do not match.", errors=["Passwords do not match."])

        try:
            validate_password_change(current_password=current_password, password=password)
        except ValidationError as e:
            return FlowResult(Outcome.VALIDATION_FAILED, notice=str(e), errors=e.errors)

        account = self._accounts.get_by_id(identity.account_id)
        if account is None or not self._hasher.verify(current_password, account.password_hash):
            return FlowResult(Outcome.INVALID_CREDENTIALS, notice="Current password is incorrect.")

        if not self._accounts.update_password(account_id=account.account_id, password_hash=self._hasher.hash(password)):
            return FlowResult(Outcome.NOT_FOUND, notice="Password update failed.")

        logger.info("Account %s changed password", account.account_id)
        fresh = self._reissue(account, credential)
        return FlowResult(Outcome.UPDATED, notice="Password successfully updated.", credential=fresh)

    def logout(self, *, credential: Optional[str] = None) -> FlowResult:
        # Revoking an absent or already revoked credential is a no-op.
        self._issuer.revoke(credential)
        return FlowResult(Outcome.LOGGED_OUT, notice="You have been logged out.")

    def _reissue(self, account: Account, old_credential: Optional[str]):
        fresh = self._issuer.issue(account.snapshot())
        if old_credential:
            self._issuer.revoke(old_credential)
        return fresh
