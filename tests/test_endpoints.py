"""
Tests for the endpoint catalog – paths, payload order and pre-request checks.
"""

import datetime
import unittest

from hilink import Client, UssdState
from hilink.codec.markup import decode_xml
from hilink.codec.tree import Scalar
from hilink.exceptions import InvalidMessageError, InvalidResponseError, MessageTooLongError

from fake_device import DEVICE_URL, OK, FakeDevice


class _EndpointTest(unittest.TestCase):
    def setUp(self):
        self.device = FakeDevice()
        self.client = Client(DEVICE_URL, transport=self.device, start_session=False)
        self.client.set_session_and_token_id("sid", "tok")

    def sent_fields(self, index=-1):
        return decode_xml(self.device.requests[index].body, unwrap_root=True)


class TestSms(_EndpointTest):
    def test_too_long_message_rejected_before_request(self):
        with self.assertRaises(MessageTooLongError):
            self.client.sms_send("x" * 160, "+100")
        self.assertEqual(self.device.requests, [])

    def test_control_characters_rejected_before_request(self):
        with self.assertRaises(InvalidMessageError):
            self.client.sms_send("hello\x1bworld", "+100")
        self.assertEqual(self.device.requests, [])

    def test_send_payload_order(self):
        self.device.reply("api/sms/send-sms", OK)
        when = datetime.datetime(2024, 5, 17, 9, 30, 0)
        self.assertTrue(self.client.sms_send("x" * 159, "+100", "+200", now=when))

        fields = self.sent_fields()
        self.assertEqual(
            fields.keys(),
            ["Index", "Phones", "Sca", "Content", "Length", "Reserved", "Date"],
        )
        phones = fields["Phones"].as_mapping()
        self.assertEqual(phones.pairs, (("Phone", Scalar("+100")), ("Phone", Scalar("+200"))))
        self.assertEqual(fields.text("Sca"), "")
        self.assertEqual(fields.text("Length"), "159")
        self.assertEqual(fields.text("Date"), "2024-05-17 09:30:00")

    def test_list_order(self):
        self.device.reply("api/sms/sms-list", "<response><Count>0</Count><Messages/></response>")
        result = self.client.sms_list(1, 1, 20, unread_preferred=True)
        self.assertEqual(result.text("Count"), "0")
        fields = self.sent_fields()
        self.assertEqual(
            fields.keys(),
            ["PageIndex", "ReadCount", "BoxType", "SortType", "Ascending", "UnreadPreferred"],
        )
        self.assertEqual(fields.text("UnreadPreferred"), "1")


class TestProfiles(_EndpointTest):
    def test_is_default_mapping(self):
        self.device.reply("api/dialup/profiles", OK)
        self.client.profile_add("home", "internet", "", "", is_default=True)
        self.client.profile_add("work", "internet", "", "", is_default=False)
        self.assertEqual(self.sent_fields(0).text("SetDefault"), "0")
        self.assertEqual(self.sent_fields(1).text("SetDefault"), "1")

    def test_profile_nested_block(self):
        self.device.reply("api/dialup/profiles", OK)
        self.client.profile_add("home", "internet", "user", "pw", is_default=False)
        profile = self.sent_fields()["Profile"].as_mapping()
        self.assertEqual(profile.keys()[:3], ["Index", "IsValid", "Name"])
        self.assertEqual(profile.text("ApnName"), "internet")
        self.assertEqual(profile.text("DialupNum"), "*99#")


class TestUssd(_EndpointTest):
    def test_status_parsed(self):
        self.device.reply("api/ussd/status", "<response><result>1</result></response>")
        self.assertEqual(self.client.ussd_status(), UssdState.ACTIVE)

    def test_status_not_a_number(self):
        self.device.reply("api/ussd/status", "<response><result>busy</result></response>")
        with self.assertRaises(InvalidResponseError):
            self.client.ussd_status()

    def test_release_is_get(self):
        self.device.reply("api/ussd/release", OK)
        self.assertTrue(self.client.ussd_release())
        self.assertEqual(self.device.requests[0].method, "GET")


class TestMisc(_EndpointTest):
    def test_reboot_control_code(self):
        self.device.reply("api/device/control", OK)
        self.assertTrue(self.client.device_reboot())
        self.assertEqual(self.sent_fields().text("Control"), "1")

    def test_pin_enter_puk(self):
        self.device.reply("api/pin/operate", OK)
        self.client.pin_enter_puk("12345678", "0000")
        fields = self.sent_fields()
        self.assertEqual(fields.keys(), ["OperateType", "CurrentPin", "NewPin", "PukCode"])
        self.assertEqual(fields.text("OperateType"), "4")
        self.assertEqual(fields.text("PukCode"), "12345678")

    def test_phonebook_create_fields(self):
        self.device.reply("api/pb/pb-new", "<response/>")
        self.client.phonebook_create(1, "Alice", "555")
        fields = self.sent_fields()
        blocks = fields.get_all("Field")
        self.assertEqual(len(blocks), 5)
        self.assertEqual(blocks[0].as_mapping().text("Value"), "Alice")
        self.assertEqual(blocks[1].as_mapping().text("Name"), "MobilePhone")

    def test_cradle_mac(self):
        self.device.reply("api/cradle/current-mac",
                          "<response><currentmac>00:11:22:33:44:55</currentmac></response>")
        self.assertEqual(self.client.cradle_mac(), "00:11:22:33:44:55")

    def test_upnp_set(self):
        self.device.reply("api/security/upnp", OK)
        self.assertTrue(self.client.upnp_set(True))
        self.assertEqual(self.sent_fields().text("UpnpStatus"), "1")


if __name__ == "__main__":
    unittest.main()
