from scripts.seed_data import COMPLETED_TITLES, DEMO_TASKS, seed_demo_data


class TestSeedData:
    def test_seed_is_idempotent(self, memory_store):
        user_id = seed_demo_data(memory_store)
        seed_demo_data(memory_store)

        assert memory_store.count_tasks(user_id) == len(DEMO_TASKS)
        assert memory_store.count_tasks(user_id, completed=True) == len(COMPLETED_TITLES)
        # One immediate and one delayed completion
        assert memory_store.get_user(user_id).xp == 20
