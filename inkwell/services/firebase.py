"""Firebase Admin SDK application bootstrap."""

from logging import getLogger

from firebase_admin import App, credentials, delete_app, get_app, initialize_app

from inkwell.configs import Settings, file_logger

logger = file_logger(getLogger(__name__))

FIREBASE_APP_NAME = "inkwell"


def get_firebase_app(config: Settings) -> App:
    """
    Return the named Firebase app, initializing it on first use.

    Uses the service-account file when ``FIREBASE_CREDENTIALS_FILE`` is set
    and Application Default Credentials otherwise.
    """
    try:
        return get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass

    if config.FIREBASE_CREDENTIALS_FILE:
        cred = credentials.Certificate(config.FIREBASE_CREDENTIALS_FILE)
    else:
        cred = credentials.ApplicationDefault()

    app = initialize_app(cred, {"projectId": config.FIREBASE_PROJECT_ID}, name=FIREBASE_APP_NAME)
    logger.info(f"Firebase app initialized for project {config.FIREBASE_PROJECT_ID}")
    return app


def release_firebase_app() -> None:
    """Delete the named Firebase app if it was initialized."""
    try:
        app = get_app(FIREBASE_APP_NAME)
    except ValueError:
        return
    delete_app(app)
    logger.info("Firebase app released")
