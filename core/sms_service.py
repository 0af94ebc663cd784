"""
SMS Gateway Adapters.

Normalizes phone numbers to international form and sends messages through an
upstream SMS provider. Every provider is wrapped in an ``SMSGateway`` with the
same contract:

    send(phone, message) -> SMSResult
    send_bulk(phones, message) -> list[SMSResult]  (same order as ``phones``)

Supported providers:
- console: simulated delivery for development and tests
- africastalking: Africa's Talking, native bulk send in one request
- twilio: Twilio, one request per message, throttled bulk

Africa's Talking API documentation:
https://developers.africastalking.com/docs/sms/sending/bulk
"""
import logging
import re
import time
from dataclasses import dataclass
from typing import List, Optional

import requests
from django.conf import settings
from django.utils import timezone

from core.exceptions import UpstreamDeliveryError

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY_CODE = '+250'


def normalize_phone_number(phone: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    Normalize a phone number to international format.

    Examples:
        0786160692 -> +250786160692
        786160692 -> +250786160692
        +250786160692 -> +250786160692

    A number without a leading 0 or + gets the country code prepended as-is,
    so a foreign number written without its + ends up with two country codes.
    """
    cleaned = re.sub(r'[\s\-()]', '', phone)

    if cleaned.startswith('0'):
        return f'{country_code}{cleaned[1:]}'

    if not cleaned.startswith('+'):
        return f'{country_code}{cleaned}'

    return cleaned


@dataclass
class SMSResult:
    """Outcome of sending one message to one recipient."""
    success: bool
    phone: str
    status: Optional[str] = None
    error: Optional[str] = None
    message_id: Optional[str] = None

    def as_dict(self):
        data = {'success': self.success, 'phone': self.phone}
        if self.success:
            data['status'] = self.status
            if self.message_id:
                data['message_id'] = self.message_id
        else:
            data['error'] = self.error
        return data


class SMSGateway:
    """
    Base class for SMS providers.

    Subclasses implement ``_deliver`` for a single, already-normalized number.
    Providers with a bulk endpoint override ``send_bulk``.
    """

    name = 'base'

    def __init__(self, country_code=DEFAULT_COUNTRY_CODE, throttle_seconds=1.0, timeout=10):
        self.country_code = country_code
        self.throttle_seconds = throttle_seconds
        self.timeout = timeout

    def normalize(self, phone: str) -> str:
        return normalize_phone_number(phone, self.country_code)

    def _deliver(self, phone: str, message: str) -> SMSResult:
        raise NotImplementedError

    def send(self, phone: str, message: str) -> SMSResult:
        """
        Send one message. Provider failures are returned, never raised.
        """
        formatted_phone = self.normalize(phone)
        try:
            return self._deliver(formatted_phone, message)
        except UpstreamDeliveryError as e:
            logger.error(f"[{self.name}] Failed to send SMS to {formatted_phone}: {e}")
            return SMSResult(success=False, phone=e.phone or formatted_phone, error=str(e))
        except requests.exceptions.Timeout:
            logger.error(f"[{self.name}] Timeout sending SMS to {formatted_phone}")
            return SMSResult(success=False, phone=formatted_phone, error='Request timeout')
        except requests.exceptions.RequestException as e:
            logger.error(f"[{self.name}] Network error sending SMS to {formatted_phone}: {str(e)}")
            return SMSResult(success=False, phone=formatted_phone, error=f'Network error: {str(e)}')

    def send_bulk(self, phones: List[str], message: str) -> List[SMSResult]:
        """
        Send the same message to several recipients, one at a time.

        Sends are sequential with a fixed pause between them to stay under
        provider rate limits.
        """
        results = []
        for index, phone in enumerate(phones):
            if index > 0 and len(phones) > 1 and self.throttle_seconds:
                time.sleep(self.throttle_seconds)
            results.append(self.send(phone, message))

        successful = sum(1 for result in results if result.success)
        logger.info(
            f"[{self.name}] Bulk SMS sent: {successful}/{len(phones)} successful"
        )
        return results


class ConsoleSMSGateway(SMSGateway):
    """Simulated gateway for development/testing. Logs instead of sending."""

    name = 'console'

    def _deliver(self, phone: str, message: str) -> SMSResult:
        logger.info(
            f"\n{'=' * 60}\n"
            f"SIMULATED SMS\n"
            f"To: {phone}\n"
            f"Message: {message}\n"
            f"{'=' * 60}"
        )
        return SMSResult(
            success=True,
            phone=phone,
            status='simulated',
            message_id=f'SIM-{timezone.now().timestamp():.0f}',
        )


class AfricasTalkingGateway(SMSGateway):
    """
    Africa's Talking SMS gateway.

    One request can address many numbers; the response carries a status per
    recipient which is mapped back onto the input order.
    """

    name = 'africastalking'

    LIVE_URL = 'https://api.africastalking.com/version1/messaging'
    SANDBOX_URL = 'https://api.sandbox.africastalking.com/version1/messaging'

    def __init__(self, username, api_key, sender_id=None, **kwargs):
        super().__init__(**kwargs)
        self.username = username
        self.api_key = api_key
        self.sender_id = sender_id
        self.url = self.SANDBOX_URL if username == 'sandbox' else self.LIVE_URL

    def _post(self, numbers: List[str], message: str) -> List[dict]:
        payload = {
            'username': self.username,
            'to': ','.join(numbers),
            'message': message,
        }
        if self.sender_id:
            payload['from'] = self.sender_id

        response = requests.post(
            self.url,
            data=payload,
            headers={'apiKey': self.api_key, 'Accept': 'application/json'},
            timeout=self.timeout
        )

        if response.status_code not in (200, 201):
            raise UpstreamDeliveryError(
                f'Provider returned HTTP {response.status_code}: {response.text[:200]}',
                status_code=response.status_code
            )

        data = response.json()
        return data.get('SMSMessageData', {}).get('Recipients', []) or []

    def _deliver(self, phone: str, message: str) -> SMSResult:
        recipients = self._post([phone], message)
        if not recipients:
            raise UpstreamDeliveryError('No recipients processed', phone=phone)

        recipient = recipients[0]
        if recipient.get('status') == 'Success':
            return SMSResult(
                success=True,
                phone=phone,
                status=recipient.get('status'),
                message_id=recipient.get('messageId'),
            )
        raise UpstreamDeliveryError(recipient.get('status') or 'Unknown error', phone=phone)

    def send_bulk(self, phones: List[str], message: str) -> List[SMSResult]:
        if not phones:
            return []

        formatted_phones = [self.normalize(phone) for phone in phones]

        try:
            recipients = self._post(formatted_phones, message)
        except (UpstreamDeliveryError, requests.exceptions.RequestException) as e:
            logger.error(f"[{self.name}] Bulk SMS request failed: {e}")
            return [
                SMSResult(success=False, phone=phone, error=str(e) or 'Unknown error')
                for phone in formatted_phones
            ]

        by_number = {}
        for recipient in recipients:
            by_number.setdefault(recipient.get('number'), []).append(recipient)

        results = []
        for phone in formatted_phones:
            matches = by_number.get(phone)
            if not matches:
                results.append(SMSResult(success=False, phone=phone, error='No delivery status returned'))
                continue

            recipient = matches.pop(0)
            status = recipient.get('status')
            if status == 'Success':
                results.append(SMSResult(
                    success=True, phone=phone, status=status,
                    message_id=recipient.get('messageId')
                ))
            else:
                results.append(SMSResult(success=False, phone=phone, error=status or 'Unknown error'))

        successful = sum(1 for result in results if result.success)
        logger.info(f"[{self.name}] Bulk SMS sent: {successful}/{len(phones)} successful")
        return results


class TwilioGateway(SMSGateway):
    """Twilio SMS gateway. One API call per message."""

    name = 'twilio'

    BASE_URL = 'https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json'
    SUCCESS_STATUSES = ('queued', 'accepted', 'sending', 'sent', 'delivered')

    def __init__(self, account_sid, auth_token, from_number, **kwargs):
        super().__init__(**kwargs)
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number

    def _deliver(self, phone: str, message: str) -> SMSResult:
        response = requests.post(
            self.BASE_URL.format(account_sid=self.account_sid),
            data={'To': phone, 'From': self.from_number, 'Body': message},
            auth=(self.account_sid, self.auth_token),
            timeout=self.timeout
        )

        data = response.json() if response.content else {}

        if response.status_code not in (200, 201):
            raise UpstreamDeliveryError(
                data.get('message', f'HTTP {response.status_code}'),
                phone=phone,
                status_code=response.status_code
            )

        status = data.get('status')
        if status in self.SUCCESS_STATUSES:
            logger.info(f"[{self.name}] SMS sent to {phone} (SID: {data.get('sid')})")
            return SMSResult(success=True, phone=phone, status=status, message_id=data.get('sid'))

        raise UpstreamDeliveryError(data.get('error_message') or status or 'Unknown error', phone=phone)


def build_sms_gateway(provider: Optional[str] = None) -> SMSGateway:
    """
    Construct the gateway configured in settings.

    Falls back to the console gateway when SMS is disabled so that
    development environments never hit a real provider.
    """
    provider = provider or getattr(settings, 'SMS_PROVIDER', 'console')
    common = {
        'country_code': getattr(settings, 'SMS_COUNTRY_CODE', DEFAULT_COUNTRY_CODE),
        'throttle_seconds': getattr(settings, 'SMS_BULK_THROTTLE_SECONDS', 1.0),
        'timeout': getattr(settings, 'SMS_REQUEST_TIMEOUT', 10),
    }

    if not getattr(settings, 'SMS_ENABLED', False) or provider == 'console':
        return ConsoleSMSGateway(**common)

    if provider == 'africastalking':
        return AfricasTalkingGateway(
            username=settings.AFRICASTALKING_USERNAME,
            api_key=settings.AFRICASTALKING_API_KEY,
            sender_id=getattr(settings, 'SMS_SENDER_ID', None),
            **common
        )

    if provider == 'twilio':
        return TwilioGateway(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            from_number=settings.TWILIO_PHONE_NUMBER,
            **common
        )

    raise ValueError(f"Unknown SMS provider: {provider}")
