from berbagipath.campaign_models import Campaign


def test_create_campaign_persists_row(client, db, make_user, make_category):
    make_category('medical', 'Kesehatan')
    organizer = make_user(role='organizer', is_verified=True)
    payload = {
        'title': 'Operasi Jantung untuk Bayi Raffa',
        'description': 'Bayi Raffa membutuhkan operasi jantung segera.',
        'targetAmount': 250000000,
        'category': 'medical',
        'organizerId': organizer.id,
    }
    resp = client.post('/api/campaigns', json=payload)
    assert resp.status_code == 201
    body = resp.json()
    assert body['success'] is True
    data = body['data']
    assert data['slug'] == 'operasi-jantung-untuk-bayi-raffa'
    assert data['status'] == 'pending'
    assert data['categoryId'] == 'medical'
    assert data['daysLeft'] == 30
    assert data['progress'] == 0

    row = db.query(Campaign).filter(Campaign.id == data['id']).first()
    assert row is not None
    assert row.target_amount == 250000000


def test_duplicate_titles_get_unique_slugs(client, db):
    payload = {'title': 'Bantu Korban Banjir', 'description': 'x', 'targetAmount': 1000000}
    first = client.post('/api/campaigns', json=payload).json()['data']
    second = client.post('/api/campaigns', json=payload).json()['data']
    assert first['slug'] == 'bantu-korban-banjir'
    assert second['slug'] == 'bantu-korban-banjir-2'


def test_create_campaign_validation(client, db, make_user):
    resp = client.post('/api/campaigns', json={'title': 'Tanpa target', 'description': 'x'})
    assert resp.status_code == 400
    assert resp.json()['success'] is False
    assert 'targetAmount' in resp.json()['error'] or 'target_amount' in resp.json()['error']

    resp = client.post('/api/campaigns', json={'title': 'A', 'description': 'x', 'targetAmount': 10,
                                               'category': 'nope'})
    assert resp.status_code == 400
    assert resp.json()['error'] == 'Kategori tidak ditemukan'

    unverified = make_user()
    resp = client.post('/api/campaigns', json={'title': 'A', 'description': 'x', 'targetAmount': 10,
                                               'organizerId': unverified.id})
    assert resp.status_code == 403


def test_get_by_id_or_slug_and_list_filters(client, db, make_campaign):
    active = make_campaign(title='Aktif', slug='aktif', status='active')
    make_campaign(title='Menunggu', slug='menunggu', status='pending')

    assert client.get(f'/api/campaigns/{active.id}').json()['data']['title'] == 'Aktif'
    assert client.get('/api/campaigns/aktif').json()['data']['id'] == active.id
    assert client.get('/api/campaigns/missing').status_code == 404

    listed = client.get('/api/campaigns', params={'status': 'active'}).json()['data']
    assert [c['slug'] for c in listed] == ['aktif']
    searched = client.get('/api/campaigns', params={'search': 'Menung'}).json()['data']
    assert [c['slug'] for c in searched] == ['menunggu']


def test_urgent_campaigns_listed_first(client, db, make_campaign):
    make_campaign(slug='biasa', is_urgent=False)
    make_campaign(slug='mendesak', is_urgent=True)
    listed = client.get('/api/campaigns').json()['data']
    assert listed[0]['slug'] == 'mendesak'


def test_update_and_delete_campaign(client, db, make_campaign):
    campaign = make_campaign(status='pending', current_amount=250000, target_amount=1000000)
    resp = client.put(f'/api/campaigns/{campaign.id}', json={'status': 'active', 'isVerified': True})
    assert resp.status_code == 200
    data = resp.json()['data']
    assert data['status'] == 'active'
    assert data['isVerified'] is True
    assert data['progress'] == 25.0

    assert client.put(f'/api/campaigns/{campaign.id}', json={'status': 'bogus'}).status_code == 400

    assert client.delete(f'/api/campaigns/{campaign.id}').status_code == 200
    assert client.get(f'/api/campaigns/{campaign.id}').status_code == 404


def test_update_ignores_explicit_nulls(client, db, make_campaign):
    campaign = make_campaign(title='Air Bersih Desa')
    resp = client.put(f'/api/campaigns/{campaign.id}', json={'title': None, 'targetAmount': None,
                                                              'description': 'Sumur baru'})
    assert resp.status_code == 200
    data = resp.json()['data']
    assert data['title'] == 'Air Bersih Desa'
    assert data['targetAmount'] == 1000000
    assert data['description'] == 'Sumur baru'
