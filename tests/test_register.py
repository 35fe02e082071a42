"""
Tests for client registration and login API.
"""

from django.contrib.auth.hashers import check_password
from django.test import TestCase
from rest_framework.test import APIClient

from apps.clients.models import Client


class RegisterClientTests(TestCase):
    """Test POST /api/register."""

    def setUp(self):
        self.client = APIClient()
        self.url = '/api/register'
        self.valid_data = {
            'full_name': 'Asha Rao',
            'email': 'Asha.Rao@Example.com',
            'mobile': '98765 43210',
            'age': 30,
            'password': 'secret-pass',
        }

    def test_register_success(self):
        """Successful registration returns 201 with the client summary."""
        response = self.client.post(self.url, self.valid_data, format='json')
        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['message'], 'User registered successfully')
        user = data['user']
        self.assertIn('id', user)
        self.assertEqual(user['full_name'], 'Asha Rao')
        self.assertEqual(user['email'], 'asha.rao@example.com')
        self.assertEqual(user['mobile'], '9876543210')
        self.assertEqual(user['age'], 30)
        self.assertNotIn('password', user)

    def test_client_created_in_db(self):
        """Client should be persisted with a hashed password."""
        self.client.post(self.url, self.valid_data, format='json')
        self.assertEqual(Client.objects.count(), 1)
        client = Client.objects.first()
        self.assertNotEqual(client.password, 'secret-pass')
        self.assertTrue(check_password('secret-pass', client.password))
        self.assertIsNone(client.retirement_age)
        self.assertIsNone(client.risk_assessment)

    def test_duplicate_email(self):
        """Registering the same email twice returns 409."""
        self.client.post(self.url, self.valid_data, format='json')
        again = {**self.valid_data, 'email': 'asha.rao@example.com'}
        response = self.client.post(self.url, again, format='json')
        self.assertEqual(response.status_code, 409)
        self.assertTrue(response.json()['error'])
        self.assertEqual(Client.objects.count(), 1)

    def test_missing_full_name(self):
        """Missing required field returns 400."""
        data = {**self.valid_data}
        del data['full_name']
        response = self.client.post(self.url, data, format='json')
        self.assertEqual(response.status_code, 400)

    def test_short_name(self):
        data = {**self.valid_data, 'full_name': 'A'}
        response = self.client.post(self.url, data, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()['detail']['full_name'],
            ['Name must be at least 2 characters'],
        )

    def test_age_under_18(self):
        """Age under 18 should be rejected."""
        data = {**self.valid_data, 'age': 17}
        response = self.client.post(self.url, data, format='json')
        self.assertEqual(response.status_code, 400)

    def test_invalid_mobile(self):
        """Mobile numbers must have exactly 10 digits."""
        data = {**self.valid_data, 'mobile': '12345'}
        response = self.client.post(self.url, data, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()['detail']['mobile'],
            ['Please enter a valid 10-digit mobile number'],
        )

    def test_short_password(self):
        data = {**self.valid_data, 'password': 'short'}
        response = self.client.post(self.url, data, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()['detail']['password'],
            ['Password must be at least 8 characters'],
        )

    def test_error_response_format(self):
        """Errors use the {error, status_code, detail} envelope."""
        response = self.client.post(self.url, {}, format='json')
        data = response.json()
        self.assertTrue(data['error'])
        self.assertEqual(data['status_code'], 400)
        self.assertIn('email', data['detail'])


class LoginTests(TestCase):
    """Test POST /api/login."""

    def setUp(self):
        self.client = APIClient()
        self.client.post('/api/register', {
            'full_name': 'Asha Rao',
            'email': 'asha@example.com',
            'mobile': '9876543210',
            'age': 30,
            'password': 'secret-pass',
        }, format='json')
        self.url = '/api/login'

    def test_login_success(self):
        response = self.client.post(self.url, {
            'email': 'ASHA@example.com',
            'password': 'secret-pass',
        }, format='json')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['message'], 'Login successful')
        self.assertEqual(data['user']['email'], 'asha@example.com')

    def test_wrong_password(self):
        response = self.client.post(self.url, {
            'email': 'asha@example.com',
            'password': 'wrong-pass',
        }, format='json')
        self.assertEqual(response.status_code, 401)

    def test_unknown_email(self):
        response = self.client.post(self.url, {
            'email': 'nobody@example.com',
            'password': 'secret-pass',
        }, format='json')
        self.assertEqual(response.status_code, 401)
