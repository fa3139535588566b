"""
Endpoint catalog.

Thin wrappers that fix the path, field names and field order of each WebUI
endpoint and hand them to the dispatcher's three call shapes:

  do(path, payload)               – fields of the response element
  do_string(path, payload, name)  – one text field
  do_check_ok(path, payload)      – ``<response>OK</response>`` acknowledgement

Values come back as text exactly as the device sent them.  Payloads whose
element order matters to the firmware are built with ``simple_request``.
"""

from __future__ import annotations

import datetime
import re
from typing import Optional

from .codec.fields import bool_to_string, nvp, repeated, simple_request
from .codec.tree import Mapping
from .config import SMS_DATE_FORMAT, SMS_MAX_LENGTH
from .exceptions import InvalidMessageError, InvalidResponseError, MessageTooLongError
from .types import DeviceControl, PinType, UssdState

# Code points outside the XML 1.0 Char production
_XML_INVALID_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff\ud800-\udfff]")


class EndpointsMixin:
    """Mixed into :class:`hilink.client.Client`; relies on its call shapes."""

    # ------------------------------------------------------------------
    # Static configuration documents
    # ------------------------------------------------------------------

    def global_config(self) -> Mapping:
        return self.do("config/global/config.xml")

    def network_types(self) -> Mapping:
        return self.do("config/global/net-type.xml")

    def pc_assistant_config(self) -> Mapping:
        return self.do("config/pcassistant/config.xml")

    def device_config(self) -> Mapping:
        return self.do("config/deviceinformation/config.xml")

    def webui_config(self) -> Mapping:
        return self.do("config/webuicfg/config.xml")

    def sms_config(self) -> Mapping:
        return self.do("api/sms/config")

    def wlan_config(self) -> Mapping:
        """Basic WLAN settings."""
        return self.do("api/wlan/basic-settings")

    def dhcp_config(self) -> Mapping:
        return self.do("api/dhcp/settings")

    # ------------------------------------------------------------------
    # Cradle
    # ------------------------------------------------------------------

    def cradle_status_info(self) -> Mapping:
        return self.do("api/cradle/status-info")

    def cradle_mac(self) -> str:
        return self.do_string("api/cradle/current-mac", None, "currentmac")

    def cradle_mac_set(self, addr: str) -> bool:
        return self.do_check_ok("api/cradle/current-mac", {"currentmac": addr})

    # ------------------------------------------------------------------
    # Device
    # ------------------------------------------------------------------

    def autorun_version(self) -> str:
        return self.do_string("api/device/autorun-version", None, "Version")

    def device_basic_info(self) -> Mapping:
        return self.do("api/device/basic_information")

    def public_key(self) -> str:
        """The webserver's RSA public key modulus (``encpubkeyn``)."""
        return self.do_string("api/webserver/publickey", None, "encpubkeyn")

    def device_control(self, code: int) -> bool:
        """Send a raw ``Control`` code; see :class:`hilink.types.DeviceControl`."""
        return self.do_check_ok("api/device/control", {"Control": int(code)})

    def device_reboot(self) -> bool:
        return self.device_control(DeviceControl.REBOOT)

    def device_reset(self) -> bool:
        """Restore the factory configuration."""
        return self.device_control(DeviceControl.RESET)

    def device_shutdown(self) -> bool:
        return self.device_control(DeviceControl.SHUTDOWN)

    def device_features(self) -> Mapping:
        return self.do("api/device/device-feature-switch")

    def device_info(self) -> Mapping:
        return self.do("api/device/information")

    def device_mode_set(self, mode: int) -> bool:
        """Set the device mode (0 = project, 1 = debug)."""
        return self.do_check_ok("api/device/mode", {"mode": int(mode)})

    def fastboot_features(self) -> Mapping:
        return self.do("api/device/fastbootswitch")

    def power_features(self) -> Mapping:
        return self.do("api/device/powersaveswitch")

    def tethering_features(self) -> Mapping:
        return self.do("api/device/usb-tethering-switch")

    def signal_info(self) -> Mapping:
        return self.do("api/device/signal")

    def log_path(self) -> str:
        return self.do_string("api/device/compresslogfile", None, "LogPath")

    def log_info(self) -> Mapping:
        return self.do("api/device/logsetting")

    # ------------------------------------------------------------------
    # Dial-up / mobile data
    # ------------------------------------------------------------------

    def connection_info(self) -> Mapping:
        return self.do("api/dialup/connection")

    def connection_profile(self, roaming: str, max_idle_time: str) -> bool:
        return self.do_check_ok("api/dialup/connection", simple_request(
            "ConnectMode", "0",
            "MTU", "1500",
            "MaxIdelTime", max_idle_time,
            "RoamAutoConnectEnable", roaming,
            "auto_dial_switch", "1",
            "pdp_always_on", "0",
        ))

    def mobile_data_switch(self) -> Mapping:
        return self.do("api/dialup/mobile-dataswitch")

    def mobile_data_switch_state(self, state: str) -> bool:
        return self.do_check_ok("api/dialup/mobile-dataswitch", {"dataswitch": state})

    def mobile_data_activate(self) -> bool:
        return self.mobile_data_switch_state("1")

    def mobile_data_deactivate(self) -> bool:
        return self.mobile_data_switch_state("0")

    def connect(self) -> bool:
        """Dial the network provider."""
        return self.do_check_ok("api/dialup/dial", {"Action": "1"})

    def disconnect(self) -> bool:
        return self.do_check_ok("api/dialup/dial", {"Action": "0"})

    # ------------------------------------------------------------------
    # APN profiles
    # ------------------------------------------------------------------

    def profile_info(self) -> Mapping:
        return self.do("api/dialup/profiles")

    def profile_add(
        self,
        name: str,
        apn: str,
        user: str,
        password: str,
        is_default: bool,
    ) -> bool:
        # NOTE: is_default=True sends SetDefault=0; confirm against firmware
        # before flipping it.
        set_default = "0" if is_default else "1"
        return self.do_check_ok("api/dialup/profiles", simple_request(
            "Delete", 0,
            "SetDefault", set_default,
            "Modify", 1,
            "Profile", simple_request(
                "Index", "",
                "IsValid", 1,
                "Name", name,
                "ApnIsStatic", "1",
                "ApnName", apn,
                "DialupNum", "*99#",
                "Username", user,
                "Password", password,
                "AuthMode", "0",
                "IpIsStatic", "",
                "IpAddress", "",
                "DnsIsStatic", "",
                "PrimaryDns", "",
                "SecondaryDns", "",
                "ReadOnly", "0",
                "iptype", "0",
            ),
        ))

    def profile_delete(self, index: str, new_default: str) -> bool:
        return self.do_check_ok("api/dialup/profiles", simple_request(
            "Delete", index,
            "SetDefault", new_default,
            "Modify", "0",
        ))

    # ------------------------------------------------------------------
    # Global / language
    # ------------------------------------------------------------------

    def global_features(self) -> Mapping:
        return self.do("api/global/module-switch")

    def language(self) -> str:
        return self.do_string("api/language/current-language", None, "CurrentLanguage")

    def language_set(self, lang: str) -> bool:
        return self.do_check_ok("api/language/current-language", {"CurrentLanguage": lang})

    # ------------------------------------------------------------------
    # Monitoring
    # ------------------------------------------------------------------

    def notification_info(self) -> Mapping:
        return self.do("api/monitoring/check-notifications")

    def sim_info(self) -> Mapping:
        return self.do("api/monitoring/converged-status")

    def status_info(self) -> Mapping:
        return self.do("api/monitoring/status")

    def traffic_info(self) -> Mapping:
        return self.do("api/monitoring/traffic-statistics")

    def traffic_clear(self) -> bool:
        return self.do_check_ok("api/monitoring/clear-traffic", {"ClearTraffic": "1"})

    def month_info(self) -> Mapping:
        return self.do("api/monitoring/month_statistics")

    def wlan_month_info(self) -> Mapping:
        return self.do("api/monitoring/month_statistics_wlan")

    # ------------------------------------------------------------------
    # Network
    # ------------------------------------------------------------------

    def network_info(self) -> Mapping:
        """Current network provider (PLMN)."""
        return self.do("api/net/current-plmn")

    def wifi_features(self) -> Mapping:
        return self.do("api/wlan/wifi-feature-switch")

    def mode_list(self) -> Mapping:
        return self.do("api/net/net-mode-list")

    def mode_info(self) -> Mapping:
        return self.do("api/net/net-mode")

    def mode_network_info(self) -> Mapping:
        return self.do("api/net/network")

    def mode_set(self, net_mode: str, net_band: str, lte_band: str) -> bool:
        return self.do_check_ok("api/net/net-mode", simple_request(
            "NetworkMode", net_mode,
            "NetworkBand", net_band,
            "LTEBand", lte_band,
        ))

    # ------------------------------------------------------------------
    # SIM PIN
    # ------------------------------------------------------------------

    def pin_info(self) -> Mapping:
        return self.do("api/pin/status")

    def _pin_operate(self, op: PinType, current: str, new: str, puk: str) -> bool:
        return self.do_check_ok("api/pin/operate", simple_request(
            "OperateType", int(op),
            "CurrentPin", current,
            "NewPin", new,
            "PukCode", puk,
        ))

    def pin_enter(self, pin: str) -> bool:
        return self._pin_operate(PinType.ENTER, pin, "", "")

    def pin_activate(self, pin: str) -> bool:
        return self._pin_operate(PinType.ACTIVATE, pin, "", "")

    def pin_deactivate(self, pin: str) -> bool:
        return self._pin_operate(PinType.DEACTIVATE, pin, "", "")

    def pin_change(self, pin: str, new: str) -> bool:
        return self._pin_operate(PinType.CHANGE, pin, new, "")

    def pin_enter_puk(self, puk: str, new: str) -> bool:
        return self._pin_operate(PinType.ENTER_PUK, new, new, puk)

    def pin_save_info(self) -> Mapping:
        return self.do("api/pin/save-pin")

    def pin_simlock_info(self) -> Mapping:
        return self.do("api/pin/simlock")

    # ------------------------------------------------------------------
    # SMS
    # ------------------------------------------------------------------

    def sms_features(self) -> Mapping:
        return self.do("api/sms/sms-feature-switch")

    def sms_list(
        self,
        box_type: int,
        page: int,
        count: int,
        sort_by_name: bool = False,
        ascending: bool = False,
        unread_preferred: bool = False,
    ) -> Mapping:
        return self.do("api/sms/sms-list", simple_request(
            "PageIndex", int(page),
            "ReadCount", int(count),
            "BoxType", int(box_type),
            "SortType", bool_to_string(sort_by_name),
            "Ascending", bool_to_string(ascending),
            "UnreadPreferred", bool_to_string(unread_preferred),
        ))

    def sms_count(self) -> Mapping:
        return self.do("api/sms/sms-count")

    def sms_send(self, msg: str, *to: str, now: Optional[datetime.datetime] = None) -> bool:
        """
        Send *msg* to every number in *to*.

        Messages of SMS_MAX_LENGTH characters or more are refused with
        MessageTooLongError before anything is sent, as are messages holding
        control characters XML cannot carry (InvalidMessageError).
        """
        if len(msg) >= SMS_MAX_LENGTH:
            raise MessageTooLongError(
                f"SMS is {len(msg)} characters, the limit is {SMS_MAX_LENGTH - 1}"
            )
        bad = _XML_INVALID_RE.search(msg)
        if bad:
            raise InvalidMessageError(
                f"SMS contains {bad.group()!r} at position {bad.start()}"
            )
        now = now or datetime.datetime.now()
        return self.do_check_ok("api/sms/send-sms", simple_request(
            "Index", "-1",
            "Phones", repeated("Phone", to),
            "Sca", "",
            "Content", msg,
            "Length", len(msg),
            "Reserved", "1",
            "Date", now.strftime(SMS_DATE_FORMAT),
        ))

    def sms_send_status(self) -> Mapping:
        return self.do("api/sms/send-status")

    def sms_read_set(self, index: str) -> bool:
        """Mark an SMS as read."""
        return self.do_check_ok("api/sms/set-read", simple_request("Index", index))

    def sms_delete(self, index: str) -> bool:
        return self.do_check_ok("api/sms/delete-sms", simple_request("Index", index))

    # ------------------------------------------------------------------
    # USSD
    # ------------------------------------------------------------------

    def ussd_status(self) -> UssdState:
        text = self.do_string("api/ussd/status", None, "result")
        try:
            return UssdState(int(text))
        except ValueError as exc:
            raise InvalidResponseError(f"unexpected USSD status {text!r}") from exc

    def ussd_code(self, code: str) -> bool:
        return self.do_check_ok("api/ussd/send", simple_request(
            "content", code,
            "codeType", "CodeType",
            "timeout", "",
        ))

    def ussd_content(self) -> str:
        return self.do_string("api/ussd/get", None, "content")

    def ussd_release(self) -> bool:
        return self.do_check_ok("api/ussd/release")

    # ------------------------------------------------------------------
    # DDNS
    # ------------------------------------------------------------------

    def ddns_list(self) -> Mapping:
        return self.do("api/ddns/ddns-list")

    # ------------------------------------------------------------------
    # Phonebook
    # ------------------------------------------------------------------

    def phonebook_group_list(
        self, page: int, count: int, sort_by_name: bool = False, ascending: bool = False,
    ) -> Mapping:
        return self.do("api/pb/group-list", simple_request(
            "PageIndex", int(page),
            "ReadCount", int(count),
            "SortType", bool_to_string(sort_by_name),
            "Ascending", bool_to_string(ascending),
        ))

    def phonebook_count(self) -> Mapping:
        return self.do("api/pb/pb-count")

    def phonebook_import(self, group: int) -> Mapping:
        """Copy the SIM contacts into *group*."""
        return self.do("api/pb/pb-copySIM", {"GroupID": int(group)})

    def phonebook_delete(self, index: int) -> bool:
        return self.do_check_ok("api/pb/delete-pb", simple_request("Index", int(index)))

    def phonebook_list(
        self,
        group: int,
        page: int,
        count: int,
        sim: bool = False,
        sort_by_name: bool = False,
        ascending: bool = False,
        keyword: str = "",
    ) -> Mapping:
        return self.do("api/pb/pb-list", simple_request(
            "GroupID", int(group),
            "PageIndex", int(page),
            "ReadCount", int(count),
            "SaveType", bool_to_string(sim),
            "SortType", bool_to_string(sort_by_name),
            "Ascending", bool_to_string(ascending),
            "KeyWord", keyword,
        ))

    def phonebook_create(self, group: int, name: str, phone: str, sim: bool = False) -> Mapping:
        return self.do("api/pb/pb-new", simple_request(
            "GroupID", int(group),
            "SaveType", bool_to_string(sim),
            "Field", nvp("FormattedName", name),
            "Field", nvp("MobilePhone", phone),
            "Field", nvp("HomePhone", ""),
            "Field", nvp("WorkPhone", ""),
            "Field", nvp("WorkEmail", ""),
        ))

    # ------------------------------------------------------------------
    # Security
    # ------------------------------------------------------------------

    def firewall_features(self) -> Mapping:
        return self.do("api/security/firewall-switch")

    def dmz_config(self) -> Mapping:
        return self.do("api/security/dmz")

    def dmz_config_set(self, enabled: bool, dmz_ip_address: str) -> bool:
        return self.do_check_ok("api/security/dmz", simple_request(
            "DmzIPAddress", dmz_ip_address,
            "DmzStatus", bool_to_string(enabled),
        ))

    def sip_alg(self) -> Mapping:
        return self.do("api/security/sip")

    def sip_alg_set(self, port: int, enabled: bool) -> bool:
        return self.do_check_ok("api/security/sip", simple_request(
            "SipPort", int(port),
            "SipStatus", bool_to_string(enabled),
        ))

    def nat_type(self) -> Mapping:
        return self.do("api/security/nat")

    def nat_type_set(self, ntype: int) -> bool:
        return self.do_check_ok("api/security/nat", simple_request("NATType", int(ntype)))

    def upnp(self) -> Mapping:
        return self.do("api/security/upnp")

    def upnp_set(self, enabled: bool) -> bool:
        return self.do_check_ok("api/security/upnp", simple_request(
            "UpnpStatus", bool_to_string(enabled),
        ))
