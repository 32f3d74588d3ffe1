import datetime

from berbagipath.notification_models import Notification
from berbagipath.withdrawal_models import Withdrawal


def _request(client, campaign, user, amount):
    return client.post('/api/withdrawals', json={
        'campaignId': campaign.id, 'userId': user.id, 'amount': amount,
        'bankName': 'BCA', 'accountNumber': '1234567890', 'accountHolder': user.name,
    })


def test_withdrawal_beyond_available_balance(client, db, make_user, make_campaign):
    organizer = make_user(role='organizer', is_verified=True)
    campaign = make_campaign(organizer_id=organizer.id, current_amount=1000000)

    assert _request(client, campaign, organizer, 1500000).status_code == 400
    assert _request(client, campaign, organizer, 600000).status_code == 201
    # 600k is reserved by the pending request
    resp = _request(client, campaign, organizer, 500000)
    assert resp.status_code == 400
    assert resp.json()['success'] is False
    assert _request(client, campaign, organizer, 400000).status_code == 201
    assert db.query(Withdrawal).count() == 2


def test_rejected_withdrawal_releases_amount(client, db, make_user, make_campaign):
    organizer = make_user(role='organizer', is_verified=True)
    campaign = make_campaign(organizer_id=organizer.id, current_amount=100000)
    withdrawal_id = _request(client, campaign, organizer, 100000).json()['data']['id']
    client.post(f'/api/admin/withdrawals/{withdrawal_id}/action', json={'action': 'reject', 'note': 'Rekening salah'})
    assert _request(client, campaign, organizer, 100000).status_code == 201


def test_withdrawal_requires_campaign_owner(client, db, make_user, make_campaign):
    organizer = make_user(role='organizer', is_verified=True)
    stranger = make_user()
    campaign = make_campaign(organizer_id=organizer.id, current_amount=1000000)
    assert _request(client, campaign, stranger, 1000).status_code == 403


def test_list_withdrawals_with_campaign_title(client, db, make_user, make_campaign):
    organizer = make_user(role='organizer', is_verified=True)
    campaign = make_campaign(title='Masjid Desa', organizer_id=organizer.id, current_amount=1000000)
    _request(client, campaign, organizer, 1000)
    data = client.get('/api/withdrawals', params={'userId': organizer.id}).json()['data']
    assert data[0]['campaignTitle'] == 'Masjid Desa'


def test_admin_queue_order_and_actions(client, db, make_user, make_campaign):
    organizer = make_user(role='organizer', is_verified=True)
    campaign = make_campaign(organizer_id=organizer.id, current_amount=1000000)
    base = datetime.datetime(2024, 1, 1)
    for i, status in enumerate(['rejected', 'completed', 'pending', 'approved', 'pending']):
        db.add(Withdrawal(campaign_id=campaign.id, user_id=organizer.id, amount=1000, bank_name='BCA',
                          account_number='1', account_holder='A', status=status,
                          created_at=base + datetime.timedelta(days=i)))
    db.commit()

    rows = client.get('/api/admin/withdrawals').json()['data']
    assert [r['status'] for r in rows] == ['pending', 'pending', 'approved', 'completed', 'rejected']
    assert rows[0]['createdAt'] < rows[1]['createdAt']
    assert rows[0]['organizerName'] == organizer.name

    pending_id = rows[0]['id']
    resp = client.post(f'/api/admin/withdrawals/{pending_id}/action', json={'action': 'approve', 'note': 'OK'})
    assert resp.status_code == 200
    assert resp.json()['data']['status'] == 'approved'
    assert resp.json()['data']['adminNote'] == 'OK'

    again = client.post(f'/api/admin/withdrawals/{pending_id}/action', json={'action': 'approve'})
    assert again.status_code == 400
    assert client.post(f'/api/admin/withdrawals/{pending_id}/action', json={'action': 'pay'}).status_code == 400
    assert db.query(Notification).filter(Notification.user_id == organizer.id).count() == 1



def test_admin_action_without_note_clears_previous_note(client, db, make_user, make_campaign):
    organizer = make_user(role='organizer', is_verified=True)
    campaign = make_campaign(organizer_id=organizer.id, current_amount=500000)
    withdrawal = Withdrawal(campaign_id=campaign.id, user_id=organizer.id, amount=100000, bank_name='BNI',
                            account_number='123', account_holder='Budi', status='pending')
    db.add(withdrawal)
    db.commit()

    resp = client.post(f'/api/admin/withdrawals/{withdrawal.id}/action', json={'action': 'approve', 'note': 'Cek rekening'})
    assert resp.json()['data']['adminNote'] == 'Cek rekening'
    resp = client.post(f'/api/admin/withdrawals/{withdrawal.id}/action', json={'action': 'complete'})
    assert resp.status_code == 200
    assert resp.json()['data']['adminNote'] is None
