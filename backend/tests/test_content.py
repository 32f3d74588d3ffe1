from berbagipath.notification_models import Notification


def test_category_crud(client, db, make_campaign):
    resp = client.post('/api/categories', json={'name': 'Bencana Alam', 'icon': 'Home'})
    assert resp.status_code == 201
    assert resp.json()['data']['id'] == 'bencana-alam'
    assert client.post('/api/categories', json={'id': 'bencana-alam', 'name': 'Lagi'}).status_code == 400

    resp = client.put('/api/categories/bencana-alam', json={'color': 'bg-orange-100'})
    assert resp.json()['data']['color'] == 'bg-orange-100'

    make_campaign(category_id='bencana-alam')
    assert client.delete('/api/categories/bencana-alam').status_code == 400
    assert [c['id'] for c in client.get('/api/categories').json()['data']] == ['bencana-alam']


def test_articles_hide_drafts_unless_all(client, db):
    published = client.post('/api/articles', json={'title': 'Kisah Inspiratif', 'content': '<p>Isi</p>'})
    assert published.status_code == 201
    assert published.json()['data']['slug'] == 'kisah-inspiratif'
    client.post('/api/articles', json={'title': 'Kisah Inspiratif', 'content': 'draf', 'status': 'draft'})

    public = client.get('/api/articles').json()['data']
    assert [a['slug'] for a in public] == ['kisah-inspiratif']
    everything = client.get('/api/articles', params={'all': 'true'}).json()['data']
    assert {a['slug'] for a in everything} == {'kisah-inspiratif', 'kisah-inspiratif-2'}

    by_slug = client.get('/api/articles/kisah-inspiratif').json()['data']
    article_id = by_slug['id']
    resp = client.put(f'/api/articles/{article_id}', json={'excerpt': 'Ringkasan'})
    assert resp.json()['data']['excerpt'] == 'Ringkasan'
    assert client.delete(f'/api/articles/{article_id}').status_code == 200
    assert client.get(f'/api/articles/{article_id}').status_code == 404


def test_reports_flow(client, db, make_campaign, make_user):
    campaign = make_campaign(title='Mencurigakan')
    reporter = make_user(name='Rina')
    assert client.post('/api/reports', json={'campaignId': campaign.id}).status_code == 400
    first = client.post('/api/reports', json={'campaignId': campaign.id, 'reason': 'Penipuan'})
    assert first.status_code == 201
    assert first.json()['data']['userId'] == 'anonymous'
    second = client.post('/api/reports', json={'campaignId': campaign.id, 'reason': 'Spam',
                                               'userId': reporter.id}).json()['data']

    client.post(f"/api/admin/reports/{first.json()['data']['id']}/action", json={'action': 'resolve'})
    rows = client.get('/api/admin/reports').json()['data']
    assert [r['status'] for r in rows] == ['pending', 'resolved']
    assert rows[0]['id'] == second['id']
    assert rows[0]['reporterName'] == 'Rina'
    assert rows[0]['campaignTitle'] == 'Mencurigakan'
    assert rows[1]['reporterName'] == 'Anonim'

    assert client.post(f"/api/admin/reports/{second['id']}/action", json={'action': 'ban'}).status_code == 400


def test_user_notifications(client, db, make_user):
    user = make_user()
    for i in range(3):
        db.add(Notification(user_id=user.id, title=f'N{i}', message='m'))
    db.commit()

    body = client.get(f'/api/users/{user.id}/notifications').json()
    assert len(body['data']) == 3
    assert body['unreadCount'] == 3

    first_id = body['data'][0]['id']
    assert client.put(f'/api/notifications/{first_id}/read').json()['data']['isRead'] is True
    assert client.get(f'/api/users/{user.id}/notifications').json()['unreadCount'] == 2

    assert client.put(f'/api/users/{user.id}/notifications/read-all').json()['updated'] == 2
    assert client.get(f'/api/users/{user.id}/notifications').json()['unreadCount'] == 0


def test_admin_task_list(client, db, make_campaign):
    assert client.get('/api/admin/notifications').json()['data'] == []
    make_campaign(status='pending')
    make_campaign(status='pending')
    tasks = client.get('/api/admin/notifications').json()['data']
    assert len(tasks) == 1
    assert tasks[0]['href'] == '/admin/campaigns?status=pending'
    assert tasks[0]['count'] == 2


def test_stats_and_health(client, db, make_user, make_campaign):
    user = make_user(balance=50000)
    campaign = make_campaign()
    make_campaign(status='pending')
    client.post('/api/donations/pay-with-wallet', json={'campaignId': campaign.id, 'userId': user.id, 'amount': 20000})
    client.post('/api/donations', json={'campaignId': campaign.id, 'amount': 10000, 'paymentMethod': 'QRIS'})

    stats = client.get('/api/stats').json()['data']
    assert stats == {'totalDonations': 20000.0, 'totalDonors': 1, 'totalCampaigns': 2,
                     'activeCampaigns': 1, 'pendingCampaigns': 1, 'totalUsers': 1}
    assert client.get('/api/health').json()['status'] == 'ok'


def test_category_update_ignores_explicit_nulls(client, db, make_category):
    make_category(id='education', name='Pendidikan')
    resp = client.put('/api/categories/education', json={'name': None, 'icon': 'Book'})
    assert resp.status_code == 200
    assert resp.json()['data']['name'] == 'Pendidikan'
    assert resp.json()['data']['icon'] == 'Book'


def test_stats_count_distinct_donors(client, db, make_user, make_campaign):
    user = make_user(balance=100000)
    campaign = make_campaign()
    for _ in range(2):
        client.post('/api/donations/pay-with-wallet', json={'campaignId': campaign.id, 'userId': user.id,
                                                            'amount': 10000})

    stats = client.get('/api/stats').json()['data']
    assert stats['totalDonations'] == 20000.0
    assert stats['totalDonors'] == 1
