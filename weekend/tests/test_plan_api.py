import shutil
import tempfile
import unittest
from pathlib import Path
from fastapi.testclient import TestClient
from weekend.api.api_run import app
from weekend.api.dependencies import get_store
from weekend.events import web_observers
from weekend.events.Event_Bus import EventBus
from weekend.infra.Plan_Repository import PlanRepository
from weekend.logic.planning.plan_store import PlanStore


class PlanApiTestCase(unittest.TestCase):
    """Every test gets its own store persisted under a temporary directory."""

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.bus = EventBus()
        self.store = PlanStore(repository=PlanRepository(self.tmp / "plans.json"), event_bus=self.bus,
                               seed_new_plans=False)
        app.dependency_overrides[get_store] = lambda: self.store

    def tearDown(self):
        app.dependency_overrides.clear()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def new_plan(self, theme="lazy"):
        resp = self.client.post('/api/plan/new', json={'theme': theme})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def add(self, activity_id, day, start):
        return self.client.post('/api/plan/current/activities',
                                json={'activity_id': activity_id, 'day': day, 'start_time': start})


class TestScheduleApi(PlanApiTestCase):

    def test_current_plan_lifecycle(self):
        self.assertIsNone(self.client.get('/api/plan/current').json()['plan'])
        plan = self.new_plan('productive')
        current = self.client.get('/api/plan/current').json()
        self.assertEqual(current['plan']['id'], plan['id'])
        self.assertEqual(current['selected_theme'], 'productive')
        self.assertEqual(self.client.post('/api/plan/current/clear').status_code, 200)
        self.assertIsNone(self.client.get('/api/plan/current').json()['plan'])

    def test_add_and_reschedule(self):
        self.new_plan()
        first = self.add('reading', 'saturday', '09:00').json()
        self.assertEqual(first, {'success': True, 'rescheduled': False, 'final_start_time': '09:00',
                                 'still_conflicts': False})
        second = self.add('yoga', 'saturday', '10:00').json()
        self.assertTrue(second['rescheduled'])
        self.assertEqual(second['final_start_time'], '11:00')
        saturday = self.client.get('/api/plan/current').json()['plan']['saturday']
        self.assertEqual([(a['id'], a['start_time'], a['end_time']) for a in saturday],
                         [('reading', '09:00', '11:00'), ('yoga', '11:00', '12:00')])

    def test_add_inline_activity_defaults_start(self):
        self.new_plan()
        resp = self.client.post('/api/plan/current/activities', json={
            'activity': {'id': 'nap', 'name': 'Nap', 'category': 'wellness', 'duration': 30},
            'day': 'sunday',
        })
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()['final_start_time'], '09:00')

    def test_add_errors(self):
        self.assertEqual(self.add('reading', 'saturday', '09:00').status_code, 404)
        self.new_plan()
        self.assertEqual(self.add('no-such-activity', 'saturday', '09:00').status_code, 404)
        self.assertEqual(self.add('reading', 'saturday', '25:00').status_code, 400)
        self.assertEqual(self.add('reading', 'saturday', 'noon').status_code, 422)
        self.assertEqual(self.add('reading', 'monday', '09:00').status_code, 422)

    def test_retime_move_remove(self):
        self.new_plan()
        self.add('reading', 'saturday', '09:00')
        retime = self.client.put('/api/plan/current/activities/saturday/reading/time', json={'start_time': '10:00'})
        self.assertEqual(retime.json()['final_start_time'], '10:00')
        missing = self.client.put('/api/plan/current/activities/saturday/ghost/time', json={'start_time': '10:00'})
        self.assertEqual(missing.status_code, 404)

        move = self.client.post('/api/plan/current/move', json={
            'activity_id': 'reading', 'from_day': 'saturday', 'to_day': 'sunday', 'start_time': '14:00'})
        self.assertEqual(move.json()['final_start_time'], '14:00')
        plan = self.client.delete('/api/plan/current/activities/sunday/reading').json()['plan']
        self.assertEqual((plan['saturday'], plan['sunday']), ([], []))
        self.assertEqual(self.client.delete('/api/plan/current/activities/monday/reading').status_code, 400)
        bad_day = self.client.put('/api/plan/current/activities/monday/reading/time', json={'start_time': '10:00'})
        self.assertEqual(bad_day.status_code, 400)

    def test_reorder(self):
        self.new_plan()
        self.add('yoga', 'sunday', '08:00')
        self.add('brunch', 'sunday', '12:00')
        plan = self.client.post('/api/plan/current/reorder',
                                json={'day': 'sunday', 'old_index': 1, 'new_index': 0}).json()['plan']
        self.assertEqual([(a['id'], a['start_time']) for a in plan['sunday']],
                         [('yoga', '08:00'), ('brunch', '09:00')])

    def test_theme_selection(self):
        self.assertEqual(self.client.post('/api/theme', json={'theme': 'social'}).json(),
                         {'selected_theme': 'social'})
        self.assertEqual(self.client.post('/api/plan/new').json()['theme'], 'social')
        self.assertEqual(self.client.post('/api/theme', json={'theme': 'boring'}).status_code, 422)

    def test_reschedule_notification(self):
        web_observers.clear()
        web_observers.start(self.bus)
        self.new_plan()
        self.add('reading', 'saturday', '09:00')
        self.add('yoga', 'saturday', '10:00')
        events = self.client.get('/api/notifications').json()['events']
        messages = [e['message'] for e in events]
        self.assertIn("Time conflict: activity moved from 10:00 to 11:00", messages)
        cursor = self.client.get('/api/notifications').json()['next_cursor']
        self.assertEqual(self.client.get(f'/api/notifications?since={cursor}').json()['events'], [])
        web_observers.clear()


class TestSavedPlansApi(PlanApiTestCase):

    def saved_plan(self):
        plan = self.new_plan()
        self.add('reading', 'saturday', '09:00')
        self.assertEqual(self.client.post('/api/plan/save').json(), {'success': True, 'plan_id': plan['id']})
        return plan['id']

    def test_save_requires_current_plan(self):
        self.assertEqual(self.client.post('/api/plan/save').status_code, 404)

    def test_save_list_load(self):
        plan_id = self.saved_plan()
        self.client.post('/api/plan/current/clear')
        plans = self.client.get('/api/plans').json()
        self.assertEqual([p['id'] for p in plans], [plan_id])
        loaded = self.client.post(f'/api/plans/{plan_id}/load').json()
        self.assertEqual(len(loaded['saturday']), 1)
        self.assertEqual(self.client.post('/api/plans/missing/load').status_code, 404)
        self.assertTrue((self.tmp / 'plans.json').exists())

    def test_duplicate_rename_delete(self):
        plan_id = self.saved_plan()
        copy = self.client.post(f'/api/plans/{plan_id}/duplicate').json()
        self.assertTrue(copy['name'].endswith(' (Copy)'))
        renamed = self.client.put(f'/api/plans/{copy["id"]}/name', json={'name': '  Road trip '}).json()
        self.assertEqual(renamed['name'], 'Road trip')
        self.assertEqual(self.client.delete(f'/api/plans/{plan_id}').status_code, 200)
        self.assertIsNone(self.client.get('/api/plan/current').json()['plan'])
        self.assertEqual(self.client.delete(f'/api/plans/{plan_id}').status_code, 404)
        self.assertEqual([p['id'] for p in self.client.get('/api/plans').json()], [copy['id']])

    def test_mood_and_colors(self):
        plan_id = self.saved_plan()
        entry = self.client.post(f'/api/plans/{plan_id}/mood', json={'mood': 'excited', 'notes': 'sunny!'}).json()
        self.assertEqual(entry['mood'], 'excited')
        colors = {'primary': '#123456', 'secondary': '#abcdef', 'accent': '#000000'}
        plan = self.client.put(f'/api/plans/{plan_id}/colors', json=colors).json()
        self.assertEqual(plan['custom_theme_colors'], colors)
        self.assertEqual(plan['overall_mood'], 'excited')
        self.assertEqual(len(self.store.saved_plans[plan_id].mood_journal), 1)
        self.assertEqual(self.client.put(f'/api/plans/{plan_id}/colors',
                                         json={**colors, 'accent': 'red'}).status_code, 422)

    def test_import(self):
        resp = self.client.post('/api/plans/import', json={
            'name': 'From a friend',
            'theme': 'social',
            'saturday': [{'id': 'karaoke', 'name': 'Karaoke', 'category': 'social', 'duration': 120,
                          'startTime': '20:00'}],
        })
        self.assertEqual(resp.status_code, 200, resp.text)
        plan = resp.json()
        self.assertEqual(plan['saturday'][0]['end_time'], '22:00')
        self.assertIn(plan['id'], self.store.saved_plans)
        bad = self.client.post('/api/plans/import', json={'name': 'x', 'saturday': [{'id': 'a', 'duration': 0}]})
        self.assertEqual(bad.status_code, 422)


class TestSharingApi(PlanApiTestCase):

    def test_exports(self):
        plan = self.new_plan()
        self.add('reading', 'saturday', '09:00')
        csv = self.client.get(f'/api/plans/{plan["id"]}/export?format=csv')
        self.assertEqual(csv.status_code, 200)
        self.assertTrue(csv.headers['content-type'].startswith('text/csv'))
        self.assertIn('attachment', csv.headers['content-disposition'])
        self.assertIn('Saturday,"Reading",09:00,11:00,120 minutes,indoor,relaxed', csv.text)
        pdf = self.client.get(f'/api/plans/{plan["id"]}/export?format=pdf')
        self.assertEqual(pdf.headers['content-type'], 'application/pdf')
        txt = self.client.get(f'/api/plans/{plan["id"]}/export?format=txt')
        self.assertIn('Theme: Lazy Weekend', txt.text)
        self.assertEqual(self.client.get(f'/api/plans/{plan["id"]}/export?format=doc').status_code, 422)
        self.assertEqual(self.client.get('/api/plans/missing/export').status_code, 404)

    def test_share_round_trip(self):
        plan = self.new_plan()
        self.add('reading', 'saturday', '09:00')
        shared = self.client.get(f'/api/plans/{plan["id"]}/share').json()
        self.assertTrue(shared['link'].endswith('?shared=' + shared['token']))
        preview = self.client.get('/api/shared', params={'token': shared['token']}).json()
        self.assertEqual(preview['name'], plan['name'])
        self.assertEqual(len(preview['saturday']), 1)
        bad = self.client.get('/api/shared', params={'token': 'garbage'})
        self.assertEqual(bad.status_code, 400)
        self.assertEqual(bad.json()['detail'], 'Invalid share link')

    def test_stats(self):
        plan = self.new_plan()
        self.add('reading', 'saturday', '09:00')
        self.add('yoga', 'sunday', '09:00')
        stats = self.client.get(f'/api/plans/{plan["id"]}/stats').json()
        self.assertEqual(stats['minutes_per_day'], {'saturday': 120, 'sunday': 60})
        self.assertEqual(stats['category_distribution'], {'indoor': 1, 'wellness': 1})


if __name__ == '__main__':
    unittest.main()
