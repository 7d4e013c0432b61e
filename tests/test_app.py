import sys
import unittest
from unittest import mock

from app import app


class TestStartup(unittest.TestCase):
    def run_main(self, identity):
        window = mock.Mock()
        fake_gui = mock.Mock(MainWindow=mock.Mock(return_value=window))
        with mock.patch.object(app, "IDENTITY", identity), \
                mock.patch.object(app, "PocketBaseClient") as client_cls, \
                mock.patch.dict(sys.modules, {"gui.main_window": fake_gui}):
            code = app.main()
        return code, client_cls.return_value, window

    def test_warns_without_identity(self) -> None:
        with self.assertLogs("app.app", level="WARNING") as logs:
            code, client, window = self.run_main("")
        self.assertEqual(code, 0)
        self.assertIn("PB_IDENTITY is not set", logs.output[0])
        client.login.assert_not_called()
        window.mainloop.assert_called_once()

    def test_logs_in_when_identity_set(self) -> None:
        code, client, window = self.run_main("me@example.com")
        self.assertEqual(code, 0)
        client.login.assert_called_once()
        window.mainloop.assert_called_once()

    def test_login_failure_exits_before_window(self) -> None:
        with mock.patch.object(app, "PocketBaseClient") as client_cls, \
                mock.patch.object(app, "IDENTITY", "me@example.com"):
            client_cls.return_value.login.side_effect = app.PBError("401 bad credentials")
            with self.assertLogs("app.app", level="ERROR"):
                self.assertEqual(app.main(), 1)


if __name__ == "__main__":
    unittest.main()
