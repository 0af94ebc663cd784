"""
Tests for phone normalization and the SMS gateway adapters.

HTTP calls to providers are mocked; nothing leaves the process.
"""
from unittest.mock import Mock, patch

import pytest
import requests

from core.sms_service import (
    AfricasTalkingGateway,
    ConsoleSMSGateway,
    TwilioGateway,
    build_sms_gateway,
    normalize_phone_number,
)
from conftest import FakeSMSGateway


def provider_response(status_code=201, payload=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = str(payload)
    response.content = b'{}' if payload is not None else b''
    return response


class TestNormalizePhoneNumber:

    @pytest.mark.parametrize('raw, expected', [
        ('0786160692', '+250786160692'),
        ('786160692', '+250786160692'),
        ('+250786160692', '+250786160692'),
        ('078 616 0692', '+250786160692'),
        ('078-616-0692', '+250786160692'),
        ('(078) 616-0692', '+250786160692'),
        ('+250 786 160 692', '+250786160692'),
    ])
    def test_formats(self, raw, expected):
        assert normalize_phone_number(raw) == expected

    def test_number_without_plus_gets_prefix_concatenated(self):
        """A country code written without '+' is not recognised and gets a second prefix."""
        assert normalize_phone_number('250786160692') == '+250250786160692'

    def test_custom_country_code(self):
        assert normalize_phone_number('0244123456', country_code='+233') == '+233244123456'

    @pytest.mark.parametrize('raw', [
        '0786160692', '786160692', '+250786160692', '(078) 616-0692', '250786160692',
    ])
    def test_idempotent(self, raw):
        once = normalize_phone_number(raw)
        assert normalize_phone_number(once) == once


class TestGatewayContract:

    def test_console_gateway_simulates_delivery(self):
        result = ConsoleSMSGateway().send('0788123456', 'Hello')

        assert result.success is True
        assert result.phone == '+250788123456'
        assert result.status == 'simulated'

    def test_upstream_error_becomes_failed_result(self):
        gateway = FakeSMSGateway(failing=['0788123456'])

        result = gateway.send('0788123456', 'Hello')

        assert result.success is False
        assert result.phone == '+250788123456'
        assert result.error == 'Invalid phone number'
        assert result.as_dict() == {
            'success': False, 'phone': '+250788123456', 'error': 'Invalid phone number'
        }

    def test_default_bulk_keeps_order_and_continues_after_failure(self):
        gateway = FakeSMSGateway(failing=['0788000002'])

        results = gateway.send_bulk(['0788000001', '0788000002', '0788000003'], 'Hi')

        assert [r.phone for r in results] == ['+250788000001', '+250788000002', '+250788000003']
        assert [r.success for r in results] == [True, False, True]
        assert len(gateway.sent) == 3

    @patch('core.sms_service.time.sleep')
    def test_default_bulk_throttles_between_sends(self, mock_sleep):
        gateway = FakeSMSGateway()
        gateway.throttle_seconds = 1.0

        gateway.send_bulk(['0788000001', '0788000002', '0788000003'], 'Hi')

        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(1.0)

    @patch('core.sms_service.time.sleep')
    def test_single_recipient_bulk_does_not_sleep(self, mock_sleep):
        gateway = FakeSMSGateway()
        gateway.throttle_seconds = 1.0

        gateway.send_bulk(['0788000001'], 'Hi')

        mock_sleep.assert_not_called()


class TestAfricasTalkingGateway:

    def make_gateway(self, username='vetconnect'):
        return AfricasTalkingGateway(username=username, api_key='test-key', sender_id='VetConnect')

    @patch('core.sms_service.requests.post')
    def test_bulk_send_is_one_request(self, mock_post):
        mock_post.return_value = provider_response(201, {
            'SMSMessageData': {'Recipients': [
                {'number': '+250788000001', 'status': 'Success', 'messageId': 'ATX-1'},
                {'number': '+250788000002', 'status': 'Success', 'messageId': 'ATX-2'},
            ]}
        })

        results = self.make_gateway().send_bulk(['0788000001', '0788000002'], 'Rain expected')

        assert mock_post.call_count == 1
        args, kwargs = mock_post.call_args
        assert args[0] == AfricasTalkingGateway.LIVE_URL
        assert kwargs['data']['to'] == '+250788000001,+250788000002'
        assert kwargs['data']['from'] == 'VetConnect'
        assert kwargs['headers']['apiKey'] == 'test-key'
        assert [r.message_id for r in results] == ['ATX-1', 'ATX-2']

    @patch('core.sms_service.requests.post')
    def test_statuses_mapped_back_to_input_order(self, mock_post):
        mock_post.return_value = provider_response(201, {
            'SMSMessageData': {'Recipients': [
                {'number': '+250788000003', 'status': 'InvalidPhoneNumber'},
                {'number': '+250788000001', 'status': 'Success', 'messageId': 'ATX-1'},
            ]}
        })

        results = self.make_gateway().send_bulk(
            ['0788000001', '0788000002', '0788000003'], 'Rain expected'
        )

        assert [r.phone for r in results] == ['+250788000001', '+250788000002', '+250788000003']
        assert results[0].success is True
        assert results[1].success is False
        assert results[1].error == 'No delivery status returned'
        assert results[2].success is False
        assert results[2].error == 'InvalidPhoneNumber'

    @patch('core.sms_service.requests.post')
    def test_request_failure_fails_every_recipient(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout('timed out')

        results = self.make_gateway().send_bulk(['0788000001', '0788000002'], 'Hi')

        assert len(results) == 2
        assert all(not r.success for r in results)

    @patch('core.sms_service.requests.post')
    def test_http_error_on_single_send(self, mock_post):
        mock_post.return_value = provider_response(401, {'error': 'bad key'})

        result = self.make_gateway().send('0788000001', 'Hi')

        assert result.success is False
        assert 'HTTP 401' in result.error

    def test_sandbox_username_uses_sandbox_url(self):
        assert self.make_gateway(username='sandbox').url == AfricasTalkingGateway.SANDBOX_URL


class TestTwilioGateway:

    def make_gateway(self):
        return TwilioGateway(account_sid='AC123', auth_token='secret', from_number='+15005550006')

    @patch('core.sms_service.requests.post')
    def test_queued_message_is_success(self, mock_post):
        mock_post.return_value = provider_response(201, {'sid': 'SM1', 'status': 'queued'})

        result = self.make_gateway().send('0788123456', 'Hello')

        assert result.success is True
        assert result.message_id == 'SM1'
        _, kwargs = mock_post.call_args
        assert kwargs['data'] == {'To': '+250788123456', 'From': '+15005550006', 'Body': 'Hello'}
        assert kwargs['auth'] == ('AC123', 'secret')

    @patch('core.sms_service.requests.post')
    def test_error_response_is_failure(self, mock_post):
        mock_post.return_value = provider_response(400, {'message': "The 'To' number is not valid"})

        result = self.make_gateway().send('12', 'Hello')

        assert result.success is False
        assert result.error == "The 'To' number is not valid"


class TestBuildGateway:

    def test_console_when_sms_disabled(self, settings):
        settings.SMS_ENABLED = False
        settings.SMS_PROVIDER = 'twilio'

        assert isinstance(build_sms_gateway(), ConsoleSMSGateway)

    def test_configured_provider(self, settings):
        settings.SMS_ENABLED = True
        settings.SMS_PROVIDER = 'africastalking'
        settings.AFRICASTALKING_USERNAME = 'sandbox'
        settings.AFRICASTALKING_API_KEY = 'key'

        gateway = build_sms_gateway()

        assert isinstance(gateway, AfricasTalkingGateway)
        assert gateway.country_code == settings.SMS_COUNTRY_CODE

    def test_unknown_provider(self, settings):
        settings.SMS_ENABLED = True

        with pytest.raises(ValueError):
            build_sms_gateway('carrier-pigeon')
