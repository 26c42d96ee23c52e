"""Minimal demonstration of the chat routing flow."""

from mechanic_core.api.service import run_chat

if __name__ == "__main__":
    for question in [
        "My car battery is dead",
        "I need a mechanic appointment for brake repair",
        "What's the weather today?",
    ]:
        envelope = run_chat({"message": question})
        print("User:", question)
        print(f"Bot ({envelope.status_code}):", envelope.body["reply"])
