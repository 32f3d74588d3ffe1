from berbagipath.campaign_models import Campaign
from berbagipath.donation_models import Donation
from berbagipath.notification_models import Notification
from berbagipath.user_models import User


def test_create_donation_with_mock_gateway(client, db, make_campaign):
    campaign = make_campaign()
    resp = client.post('/api/donations', json={
        'campaignId': campaign.id,
        'amount': 50000,
        'paymentMethod': 'QRIS',
        'name': 'Ahmad',
        'message': 'Semoga lekas sembuh',
    })
    assert resp.status_code == 201
    data = resp.json()['data']
    donation, payment = data['donation'], data['payment']
    assert donation['status'] == 'pending'
    assert donation['donorName'] == 'Ahmad'
    assert donation['externalId'].startswith('DON-')
    assert len(donation['externalId']) == len('DON-') + 8
    assert payment['gateway'] == 'mock'
    assert payment['externalId'] == donation['externalId']
    assert payment['invoiceId'].startswith('INV-')
    assert payment['paymentCode'].startswith('8888 ')

    # pending donations do not move the campaign totals
    db.refresh(campaign)
    assert campaign.current_amount == 0
    assert campaign.donor_count == 0


def test_donor_names(client, db, make_campaign):
    campaign = make_campaign()
    anon = client.post('/api/donations', json={'campaignId': campaign.id, 'amount': 10000,
                                               'paymentMethod': 'QRIS', 'name': 'Budi',
                                               'isAnonymous': True}).json()['data']['donation']
    unnamed = client.post('/api/donations', json={'campaignId': campaign.id, 'amount': 10000,
                                                  'paymentMethod': 'QRIS'}).json()['data']['donation']
    assert anon['donorName'] == 'Hamba Allah'
    assert unnamed['donorName'] == 'Anonim'


def test_create_donation_guards(client, db, make_campaign):
    assert client.post('/api/donations', json={'campaignId': 'nope', 'amount': 10000,
                                               'paymentMethod': 'QRIS'}).status_code == 404
    campaign = make_campaign()
    resp = client.post('/api/donations', json={'campaignId': campaign.id, 'amount': 0, 'paymentMethod': 'QRIS'})
    assert resp.status_code == 400
    closed = make_campaign(status='completed')
    resp = client.post('/api/donations', json={'campaignId': closed.id, 'amount': 10000, 'paymentMethod': 'QRIS'})
    assert resp.status_code == 400


def test_gateway_failure_returns_502(client, db, make_campaign, monkeypatch):
    monkeypatch.setenv('PAYMENT_GATEWAY', 'xendit')  # no XENDIT_SECRET_KEY configured
    campaign = make_campaign()
    resp = client.post('/api/donations', json={'campaignId': campaign.id, 'amount': 10000, 'paymentMethod': 'BCA'})
    assert resp.status_code == 502
    assert resp.json()['success'] is False
    assert db.query(Donation).one().status == 'failed'


def test_pay_with_wallet(client, db, make_user, make_campaign):
    user = make_user(balance=100000)
    campaign = make_campaign(title='Beasiswa')
    resp = client.post('/api/donations/pay-with-wallet', json={
        'campaignId': campaign.id, 'userId': user.id, 'amount': 40000})
    assert resp.status_code == 201
    data = resp.json()['data']
    assert data['donation']['status'] == 'paid'
    assert data['donation']['paymentMethod'] == 'wallet'
    assert data['balance'] == 60000

    db.expire_all()
    assert db.get(User, user.id).balance == 60000
    c = db.get(Campaign, campaign.id)
    assert c.current_amount == 40000
    assert c.donor_count == 1
    assert db.query(Notification).filter(Notification.user_id == user.id).count() == 1


def test_pay_with_wallet_insufficient_balance(client, db, make_user, make_campaign):
    user = make_user(balance=5000)
    campaign = make_campaign()
    resp = client.post('/api/donations/pay-with-wallet', json={
        'campaignId': campaign.id, 'userId': user.id, 'amount': 40000})
    assert resp.status_code == 400
    assert resp.json()['success'] is False

    db.expire_all()
    assert db.get(User, user.id).balance == 5000
    assert db.get(Campaign, campaign.id).current_amount == 0
    assert db.query(Donation).count() == 0


def test_donation_listings(client, db, make_user, make_campaign):
    user = make_user(balance=100000)
    campaign = make_campaign()
    client.post('/api/donations/pay-with-wallet', json={'campaignId': campaign.id, 'userId': user.id, 'amount': 10000})
    pending = client.post('/api/donations', json={'campaignId': campaign.id, 'amount': 20000,
                                                  'paymentMethod': 'QRIS'}).json()['data']['donation']

    assert len(client.get('/api/donations').json()['data']) == 2
    assert len(client.get('/api/donations', params={'status': 'pending'}).json()['data']) == 1
    # the public donor wall only lists completed donations
    wall = client.get(f'/api/donations/campaign/{campaign.id}').json()['data']
    assert [d['amount'] for d in wall] == [10000]
    assert len(client.get(f'/api/donations/user/{user.id}').json()['data']) == 1
    assert len(client.get(f'/api/users/{user.id}/donations').json()['data']) == 1

    by_ref = client.get(f"/api/donations/{pending['externalId']}").json()['data']
    assert by_ref['id'] == pending['id']
    assert client.get('/api/donations/nope').status_code == 404
