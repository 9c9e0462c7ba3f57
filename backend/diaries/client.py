"""
Client-side session context for the Criminal Diaries API.

Holds the bearer token and the current user, persists the token between
runs, and attaches it to outgoing requests. One attempt per call, no retry.
"""

import logging
import os

import requests

logger = logging.getLogger(__name__)

ADMIN_HOME = '/admin/dashboard'
USER_HOME = '/stories'
LOGGED_OUT_HOME = '/'


class ApiClientError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionContext:
    """Current token and user, with init-on-load and explicit teardown."""

    def __init__(self, base_url, token_path=None, http=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.token_path = token_path
        self.http = http or requests.Session()
        self.timeout = timeout
        self.token = None
        self.user = None
        self.error = None

    @property
    def is_authenticated(self):
        return self.token is not None and self.user is not None

    @property
    def is_admin(self):
        return bool(self.user) and self.user.get('role') == 'admin'

    def landing_path(self):
        if not self.is_authenticated:
            return LOGGED_OUT_HOME
        return ADMIN_HOME if self.is_admin else USER_HOME

    def headers(self):
        if not self.token:
            return {}
        return {'Authorization': f'Bearer {self.token}'}

    def request(self, method, path, json=None):
        """Send one API request and return the decoded body.

        Raises ``ApiClientError`` with the server's message on any non-2xx
        answer or transport failure.
        """
        url = f'{self.base_url}{path}'
        try:
            response = self.http.request(
                method, url, headers=self.headers(), json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f'{method} {url} failed: {e}')
            raise ApiClientError('An unexpected error occurred') from e
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not response.ok:
            message = body.get('message') or f'Request failed with status {response.status_code}'
            raise ApiClientError(message, response.status_code)
        return body

    # --- lifecycle ---

    def load(self):
        """Restore a persisted token and resolve the user it belongs to."""
        token = self._read_token()
        if not token:
            return None
        self.token = token
        try:
            body = self.request('GET', '/api/auth/me')
        except ApiClientError as e:
            if e.status_code == 401:
                logger.info('Stored token rejected; clearing it')
                self._clear()
            else:
                logger.error(f'Error fetching user: {e.message}')
            return None
        self.user = body.get('user')
        return self.user

    def login(self, email, password):
        return self._start('/api/auth/login', {'email': email, 'password': password}, 'Login failed')

    def signup(self, username, email, password):
        payload = {'username': username, 'email': email, 'password': password}
        return self._start('/api/auth/signup', payload, 'Signup failed')

    def logout(self):
        self._clear()
        return LOGGED_OUT_HOME

    def _start(self, path, payload, fallback_message):
        self.error = None
        try:
            body = self.request('POST', path, json=payload)
        except ApiClientError as e:
            self.error = e.message or fallback_message
            raise
        self.token = body['token']
        self.user = body['user']
        self._write_token(self.token)
        return self.landing_path()

    def _clear(self):
        self.token = None
        self.user = None
        self.error = None
        if self.token_path and os.path.exists(self.token_path):
            os.remove(self.token_path)

    def _read_token(self):
        if not self.token_path or not os.path.exists(self.token_path):
            return None
        with open(self.token_path, 'r', encoding='utf-8') as f:
            return f.read().strip() or None

    def _write_token(self, token):
        if not self.token_path:
            return
        with open(self.token_path, 'w', encoding='utf-8') as f:
            f.write(token)
