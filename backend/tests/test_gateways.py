import base64
import hashlib
import hmac
import json

import pytest
from requests.exceptions import ReadTimeout

from berbagipath import doku, payments, xendit
from berbagipath.errors import PaymentGatewayError


class FakeResponse:
    def __init__(self, status_code=200, data=None):
        self.status_code = status_code
        self._data = data if data is not None else {}

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._data


def test_xendit_requires_secret_key():
    with pytest.raises(PaymentGatewayError):
        xendit.XenditClient()


def test_xendit_create_invoice(monkeypatch):
    client = xendit.XenditClient(secret_key='xnd_development_abc')
    assert client.session.auth == ('xnd_development_abc', '')
    calls = []

    def fake_request(method, url, json=None, timeout=None):
        calls.append((method, url, json))
        return FakeResponse(200, {'id': 'inv-1', 'external_id': json['external_id'], 'amount': json['amount'],
                                  'invoice_url': 'https://checkout.xendit.co/web/inv-1', 'status': 'PENDING',
                                  'expiry_date': '2024-05-02T10:00:00.000Z'})

    monkeypatch.setattr(client.session, 'request', fake_request)
    inv = client.create_invoice('DON-1234ABCD', 50000, payer_email='a@example.com', description='Donasi')
    assert inv['invoice_id'] == 'inv-1'
    assert inv['invoice_url'].endswith('inv-1')
    method, url, body = calls[0]
    assert (method, url) == ('POST', 'https://api.xendit.co/v2/invoices')
    assert body['currency'] == 'IDR'
    assert body['invoice_duration'] == 86400


def test_xendit_error_and_timeout(monkeypatch):
    client = xendit.XenditClient(secret_key='xnd_production_abc')
    monkeypatch.setattr(client.session, 'request',
                        lambda *a, **kw: FakeResponse(400, {'message': 'API_VALIDATION_ERROR'}))
    with pytest.raises(PaymentGatewayError) as exc:
        client.get_invoice_status('inv-1')
    assert exc.value.status_code == 400
    assert exc.value.message == 'API_VALIDATION_ERROR'

    attempts = []

    def timeout(*a, **kw):
        attempts.append(1)
        raise ReadTimeout('slow')

    monkeypatch.setattr(client.session, 'request', timeout)
    monkeypatch.setattr(xendit.time, 'sleep', lambda s: None)
    with pytest.raises(PaymentGatewayError):
        client.create_qris('DON-1', 10000, 'https://example.com/cb')
    assert len(attempts) == max(1, client.RETRIES)

    with pytest.raises(PaymentGatewayError):
        client.simulate_va_payment('DON-1', 10000)


def test_verify_webhook_token(monkeypatch):
    assert xendit.verify_webhook_token('abc') is False
    monkeypatch.setenv('XENDIT_CALLBACK_TOKEN', 'abc')
    assert xendit.verify_webhook_token('abc') is True
    assert xendit.verify_webhook_token('abd') is False
    assert xendit.verify_webhook_token(None) is False


def test_doku_signature_matches_reference_computation():
    body = '{"order":{"invoice_number":"DON-1"}}'
    digest = base64.b64encode(hashlib.sha256(body.encode()).digest()).decode()
    assert doku.generate_digest(body) == digest
    component = ("Client-Id:BRN-1\nRequest-Id:r1\nRequest-Timestamp:2024-05-01T10:00:00Z\n"
                 "Request-Target:/api/webhook/doku\nDigest:" + digest)
    expected = 'HMACSHA256=' + base64.b64encode(
        hmac.new(b'secret', component.encode(), hashlib.sha256).digest()).decode()
    assert doku.generate_signature('BRN-1', 'r1', '2024-05-01T10:00:00Z', '/api/webhook/doku',
                                   digest, 'secret') == expected

    headers = {'client-id': 'BRN-1', 'request-id': 'r1', 'request-timestamp': '2024-05-01T10:00:00Z',
               'signature': expected}
    assert doku.verify_notification_signature(body.encode(), headers, 'secret') is True
    assert doku.verify_notification_signature(body.encode() + b' ', headers, 'secret') is False
    assert doku.verify_notification_signature(body.encode(), {}, 'secret') is False


def test_doku_create_invoice(monkeypatch):
    client = doku.DokuClient(client_id='BRN-1', secret_key='secret')
    sent = {}

    def fake_post(url, data=None, headers=None, timeout=None):
        sent.update(url=url, body=json.loads(data), headers=headers)
        return FakeResponse(200, {'response': {
            'order': {'invoice_number': 'TOPUP-AAAA1111'},
            'payment': {'token_id': 'tok-1', 'url': 'https://sandbox.doku.com/checkout/link/tok-1',
                        'expired_date': '20240502100000'},
        }})

    monkeypatch.setattr(client.session, 'post', fake_post)
    inv = client.create_invoice('TOPUP-AAAA1111', 25000.4, customer_name='Dewi')
    assert inv['invoice_id'] == 'tok-1'
    assert inv['invoice_url'] == 'https://sandbox.doku.com/checkout/link/tok-1'
    assert sent['url'].endswith(doku.CHECKOUT_PATH)
    assert sent['body']['order']['amount'] == 25000
    assert sent['headers']['Signature'].startswith('HMACSHA256=')


def test_payments_gateway_selection(monkeypatch):
    assert payments.gateway_name() == 'mock'
    inv = payments.create_invoice('DON-1', 10000, 'Donasi')
    assert inv['gateway'] == 'mock'
    assert inv['invoice_url'] is None
    assert inv['payment_code'].startswith('8888 ')

    monkeypatch.setenv('PAYMENT_GATEWAY', 'paypal')
    with pytest.raises(PaymentGatewayError):
        payments.gateway_name()


def test_xendit_virtual_account_and_ewallet(monkeypatch):
    client = xendit.XenditClient(secret_key='xnd_development_abc')
    sent = []

    def fake_request(method, url, json=None, timeout=None):
        sent.append((url, json))
        if url.endswith('/callback_virtual_accounts'):
            return FakeResponse(200, {'id': 'va-1', 'external_id': json['external_id'], 'account_number': '88081234',
                                      'bank_code': 'BCA', 'expected_amount': json['expected_amount'],
                                      'status': 'PENDING'})
        return FakeResponse(200, {'id': 'ewc-1', 'reference_id': json['reference_id'], 'charge_amount': json['amount'],
                                  'status': 'PENDING', 'channel_code': json['channel_code'],
                                  'actions': [{'url_type': 'DEEPLINK', 'url': 'app://pay'},
                                              {'url_type': 'WEB', 'url': 'https://ewallet.example/pay'}]})

    monkeypatch.setattr(client.session, 'request', fake_request)
    va = client.create_virtual_account('DON-VA000001', 'BCA', 'Dewi', 100000)
    assert va['account_number'] == '88081234'
    assert sent[0][1]['is_closed'] is True
    assert sent[0][1]['expiration_date'].endswith('Z')

    charge = client.create_ewallet_payment('DON-EW000001', 50000, 'ovo', mobile_number='+62812')
    assert charge['channel_code'] == 'ID_OVO'
    assert charge['redirect_url'] == 'https://ewallet.example/pay'
    assert sent[1][1]['channel_properties']['mobile_number'] == '+62812'
