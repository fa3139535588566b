"""
Tests for the request dispatcher – request building, token rotation,
serialisation and the derived call shapes.
"""

import threading
import unittest

import requests

from hilink import Client
from hilink.codec.fields import simple_request
from hilink.codec.markup import decode_xml
from hilink.config import REQUEST_CONTENT_TYPE, TOKEN_HEADER
from hilink.exceptions import (
    BadStatusCodeError,
    DeviceError,
    FieldMissingError,
    InvalidMarkupError,
    InvalidResponseError,
    InvalidValueError,
    TransportError,
)

from fake_device import DEVICE_URL, OK, FakeDevice


def _client(device, **kwargs):
    client = Client(DEVICE_URL, start_session=False, transport=device, **kwargs)
    client.set_session_and_token_id("sid-1", "t0")
    return client


class TestBuildRequest(unittest.TestCase):
    def setUp(self):
        self.device = FakeDevice()
        self.client = _client(self.device)

    def test_get_without_payload(self):
        self.device.reply("api/device/information", "<response><A>1</A></response>")
        self.client.do("api/device/information")
        req = self.device.requests[0]
        self.assertEqual(req.method, "GET")
        self.assertFalse(req.body)
        self.assertNotIn(TOKEN_HEADER, req.headers)

    def test_post_with_payload_carries_token_and_body(self):
        self.device.reply("api/sms/set-read", OK)
        self.client.do_check_ok("api/sms/set-read", simple_request("Index", "40001"))
        req = self.device.requests[0]
        self.assertEqual(req.method, "POST")
        self.assertEqual(req.headers[TOKEN_HEADER], "t0")
        self.assertEqual(req.headers["Content-Type"], REQUEST_CONTENT_TYPE)
        self.assertEqual(decode_xml(req.body, True).text("Index"), "40001")

    def test_session_cookie_sent(self):
        self.device.reply("api/monitoring/status", "<response/>")
        self.client.do("api/monitoring/status")
        self.assertEqual(self.device.requests[0].headers.get("Cookie"), "SessionID=sid-1")

    def test_session_cookie_sent_to_dotless_host(self):
        for url in ("http://localhost:8080/", "http://router/"):
            device = FakeDevice().reply("api/monitoring/status", "<response/>")
            client = Client(url, start_session=False, transport=device)
            client.set_session_and_token_id("sid-1", "t0")
            client.do("api/monitoring/status")
            self.assertEqual(device.requests[0].headers.get("Cookie"), "SessionID=sid-1", url)

    def test_timeout_forwarded(self):
        client = _client(self.device, timeout=4.5)
        self.device.reply("api/monitoring/status", "<response/>")
        client.do("api/monitoring/status")
        self.assertEqual(self.device.send_kwargs[0]["timeout"], 4.5)

    def test_build_request_does_not_send(self):
        prepared = self.client.build_request("/api/user/login", simple_request("Username", "u"))
        self.assertEqual(prepared.url, DEVICE_URL + "api/user/login")
        self.assertEqual(prepared.method, "POST")
        self.assertEqual(self.device.requests, [])


class TestTokenRotation(unittest.TestCase):
    def setUp(self):
        self.device = FakeDevice()
        self.client = _client(self.device)

    def test_each_post_uses_token_from_previous_response(self):
        for n in (1, 2, 3):
            self.device.reply("api/dialup/dial", OK, token=f"t{n}")
        for _ in range(3):
            self.client.do_check_ok("api/dialup/dial", {"Action": "1"})
        sent = [r.headers[TOKEN_HEADER] for r in self.device.requests]
        self.assertEqual(sent, ["t0", "t1", "t2"])
        self.assertEqual(self.client.token, "t3")

    def test_get_also_harvests_token(self):
        self.device.reply("api/monitoring/status", "<response/>", token="fresh")
        self.device.reply("api/dialup/dial", OK)
        self.client.do("api/monitoring/status")
        self.client.do_check_ok("api/dialup/dial", {"Action": "0"})
        self.assertEqual(self.device.requests[1].headers[TOKEN_HEADER], "fresh")

    def test_missing_header_keeps_token(self):
        self.device.reply("api/dialup/dial", OK)
        self.client.do_check_ok("api/dialup/dial", {"Action": "1"})
        self.assertEqual(self.client.token, "t0")

    def test_token_rotated_even_when_decode_fails(self):
        self.device.reply("api/monitoring/status", "not xml at all", token="t9")
        with self.assertRaises(InvalidMarkupError):
            self.client.do("api/monitoring/status")
        self.assertEqual(self.client.token, "t9")

    def test_bad_status_does_not_rotate(self):
        self.device.reply("api/monitoring/status", "<html/>", status=500, token="t9")
        with self.assertRaises(BadStatusCodeError) as ctx:
            self.client.do("api/monitoring/status")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(self.client.token, "t0")


class TestSerialisation(unittest.TestCase):
    def test_concurrent_calls_are_sequential(self):
        device = FakeDevice(delay=0.02)
        client = _client(device)
        counter = {"n": 0}

        def handler(request):
            counter["n"] += 1
            return 200, OK, {TOKEN_HEADER: f"t{counter['n']}"}

        device.handle("api/dialup/dial", handler)
        errors = []

        def worker():
            try:
                client.do_check_ok("api/dialup/dial", {"Action": "1"})
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        self.assertEqual(len(device.requests), 8)
        self.assertEqual(device.max_in_flight, 1)
        sent = [r.headers[TOKEN_HEADER] for r in device.requests]
        self.assertEqual(sent, [f"t{i}" for i in range(8)])


class TestErrors(unittest.TestCase):
    def test_transport_error_wraps_requests_exception(self):
        device = FakeDevice()
        device.reply("api/monitoring/status", exc=requests.ConnectTimeout("timed out"))
        client = _client(device)
        with self.assertRaises(TransportError) as ctx:
            client.do("api/monitoring/status")
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectTimeout)

    def test_device_error_document(self):
        device = FakeDevice()
        device.reply("api/monitoring/status", "<error><code>100003</code><message/></error>")
        client = _client(device)
        with self.assertRaises(DeviceError) as ctx:
            client.do("api/monitoring/status")
        self.assertEqual(ctx.exception.code, "100003")


class TestCallShapes(unittest.TestCase):
    def setUp(self):
        self.device = FakeDevice()
        self.client = _client(self.device)

    def test_do_returns_fields(self):
        self.device.reply("api/device/information", "<response><DeviceName>E3372</DeviceName></response>")
        info = self.client.do("api/device/information")
        self.assertEqual(info.to_dict(), {"DeviceName": "E3372"})

    def test_do_string(self):
        self.device.reply("api/language/current-language",
                          "<response><CurrentLanguage>en-us</CurrentLanguage></response>")
        self.assertEqual(
            self.client.do_string("api/language/current-language", None, "CurrentLanguage"),
            "en-us",
        )

    def test_do_string_missing_field(self):
        self.device.reply("api/ussd/get", "<response><other>x</other></response>")
        with self.assertRaises(FieldMissingError) as ctx:
            self.client.do_string("api/ussd/get", None, "content")
        self.assertEqual(ctx.exception.field, "content")

    def test_do_string_nested_field(self):
        self.device.reply("api/ussd/get", "<response><content><a>1</a></content></response>")
        with self.assertRaises(InvalidValueError):
            self.client.do_string("api/ussd/get", None, "content")

    def test_check_ok_true(self):
        self.device.reply("api/dialup/dial", "<response>OK</response>")
        self.assertTrue(self.client.do_check_ok("api/dialup/dial", {"Action": "1"}))

    def test_check_ok_false(self):
        self.device.reply("api/dialup/dial", "<response>FAILED</response>")
        self.assertFalse(self.client.do_check_ok("api/dialup/dial", {"Action": "1"}))

    def test_check_ok_without_response_field(self):
        self.device.reply("api/dialup/dial", "<result>OK</result>")
        with self.assertRaises(InvalidResponseError):
            self.client.do_check_ok("api/dialup/dial", {"Action": "1"})

    def test_check_ok_with_nested_response(self):
        self.device.reply("api/dialup/dial", "<response><a>OK</a></response>")
        with self.assertRaises(InvalidResponseError):
            self.client.do_check_ok("api/dialup/dial", {"Action": "1"})

    def test_execute_raw(self):
        self.device.reply("api/sms/sms-count", "<response><LocalInbox>3</LocalInbox></response>")
        doc = self.client.execute("api/sms/sms-count", None, unwrap_root=False)
        self.assertEqual(doc.keys(), ["response"])


if __name__ == "__main__":
    unittest.main()
