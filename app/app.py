import logging
from core.config import BASE_URL, IDENTITY, PASSWORD, REQUEST_TIMEOUT, LOG_LEVEL
from storage.pocketbase import PocketBaseClient, PBError
from controller.app_controller import AppController

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    client = PocketBaseClient(BASE_URL, timeout=REQUEST_TIMEOUT)
    if IDENTITY:
        try:
            client.login(IDENTITY, PASSWORD)
        except PBError as e:
            # Evitamos tkinter si no tenemos token
            logger.error("Login error: %s", e)
            return 1
    else:
        logger.warning("PB_IDENTITY is not set; collections created by pb_bootstrap.py "
                       "only answer authenticated requests, the board will stay empty")

    from gui.main_window import MainWindow

    controller = AppController(client)
    ui = MainWindow(controller)
    ui.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
