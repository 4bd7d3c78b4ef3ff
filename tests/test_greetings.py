import threading

from cashcard_api.app.services.greeting_service import GreetingService


def test_index_banner(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Greetings from the CashCard API!"


def test_greeting_defaults_to_world(client):
    response = client.get("/greeting")

    assert response.status_code == 200
    assert response.json()["content"] == "Hello, World!"


def test_greeting_counter_increments(client):
    first = client.get("/greeting", params={"name": "User"}).json()
    second = client.get("/greeting", params={"name": "User"}).json()

    assert first["content"] == "Hello, User!"
    assert second["id"] == first["id"] + 1


def test_counter_is_thread_safe():
    service = GreetingService()
    ids = []
    lock = threading.Lock()

    def worker():
        for _ in range(200):
            greeting = service.greet()
            with lock:
                ids.append(greeting.id)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(ids) == list(range(1, 801))
