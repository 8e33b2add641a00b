import unittest
from datetime import timedelta

from parkinglot import crud
from parkinglot.utils import create_access_token, token_subject
from tests.support import ApiTestCase


class TestLogin(ApiTestCase):

    def setUp(self):
        super().setUp()
        with self.SessionTesting() as db:
            self.user = crud.create_or_reset_user(db, 'admin', 'park-secret')
            self.user_id = self.user.id

    def test_login_success(self):
        response = self.client.post('/api/login', json={'username': 'admin', 'password': 'park-secret'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'id': self.user_id, 'username': 'admin'})
        self.assertIn('auth_token', response.cookies)

    def test_wrong_password(self):
        response = self.client.post('/api/login', json={'username': 'admin', 'password': 'nope'})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Invalid credentials')

    def test_unknown_user(self):
        response = self.client.post('/api/login', json={'username': 'ghost', 'password': 'park-secret'})
        self.assertEqual(response.status_code, 401)

    def test_missing_fields(self):
        for body in ({}, {'username': 'admin'}, {'username': '', 'password': 'x'}):
            response = self.client.post('/api/login', json=body)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()['message'], 'Username and password required')

    def test_password_is_hashed(self):
        with self.SessionTesting() as db:
            stored = crud.get_user_by_username(db, 'admin')
            self.assertNotEqual(stored.hashed_password, 'park-secret')


class TestDashboardAccess(ApiTestCase):

    def setUp(self):
        super().setUp()
        with self.SessionTesting() as db:
            crud.create_or_reset_user(db, 'admin', 'park-secret')

    def login(self):
        response = self.client.post('/api/login', json={'username': 'admin', 'password': 'park-secret'})
        self.assertEqual(response.status_code, 200)

    def test_stats_require_login(self):
        response = self.client.get('/api/parking/stats')
        self.assertEqual(response.status_code, 401)
        self.assertIn('message', response.json())

    def test_verify_token(self):
        self.assertEqual(self.client.post('/api/verify-token').status_code, 401)
        self.login()
        self.assertEqual(self.client.post('/api/verify-token').json(), {'valid': True})

    def test_stats(self):
        self.login()
        self.register('KA01AB1234')
        self.register('KA02CD5678')
        self.park('KA01AB1234')
        self.park('MH12WALKIN')
        response = self.client.get('/api/parking/stats')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            'totalCapacity': 50,
            'currentlyParked': 2,
            'availableSlots': 48,
            'registeredVehicles': 2,
            'utilization': 4,
        })

    def test_garbage_token(self):
        self.client.cookies.set('auth_token', 'not-a-jwt')
        response = self.client.get('/api/parking/stats')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'message': 'Invalid or expired token'})

    def test_expired_token(self):
        self.client.cookies.set('auth_token', create_access_token('admin', timedelta(seconds=-5)))
        response = self.client.post('/api/verify-token')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Invalid or expired token')

    def test_token_for_unknown_user(self):
        self.client.cookies.set('auth_token', create_access_token('ghost'))
        response = self.client.get('/api/parking/stats')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'User no longer exists')

    def test_missing_cookie_message(self):
        self.assertEqual(self.client.get('/api/parking/stats').json(), {'message': 'Not logged in'})

    def test_logout_clears_cookie(self):
        self.login()
        self.client.post('/api/logout')
        self.assertEqual(self.client.get('/api/parking/stats').status_code, 401)


class TestTokens(unittest.TestCase):

    def test_subject_round_trip(self):
        self.assertEqual(token_subject(create_access_token('admin')), 'admin')

    def test_expired(self):
        self.assertIsNone(token_subject(create_access_token('admin', timedelta(minutes=-1))))

    def test_tampered(self):
        header, _, signature = create_access_token('admin').split('.')
        forged_claims = create_access_token('root').split('.')[1]
        self.assertIsNone(token_subject('.'.join([header, forged_claims, signature])))


if __name__ == '__main__':
    unittest.main()
