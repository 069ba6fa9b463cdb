import asyncio
import os

import httpx

# Terminal stand-in for the chat UI. Like the browser client, it owns the
# conversation history and the latest plan, and re-sends both every turn.
# Type /plan to print the current plan, /reset to start over, /quit to exit.

DEFAULT_URL = "http://127.0.0.1:3001/api/chat"


async def send_turn(client: httpx.AsyncClient, url: str, message: str, history: list, plan):
    response = await client.post(
        url,
        json={"message": message, "conversationHistory": history, "currentAppPlan": plan},
    )
    body = response.json()
    if response.status_code != 200:
        raise RuntimeError(f"{response.status_code}: {body.get('error', response.text)}")
    return body["response"], body.get("appPlan")


async def main():
    url = os.environ.get("CHAT_SERVER_URL", DEFAULT_URL)
    history: list[dict] = []
    plan = None

    print(f"Chatting with {url}. Describe your app idea.")
    # LLM calls can take a while; the default httpx timeout is too short.
    async with httpx.AsyncClient(timeout=120.0) as client:
        while True:
            try:
                message = (await asyncio.to_thread(input, "\nyou> ")).strip()
            except EOFError:
                break
            if not message:
                continue
            if message == "/quit":
                break
            if message == "/reset":
                history, plan = [], None
                print("Conversation and plan cleared.")
                continue
            if message == "/plan":
                print(plan or "(no plan yet)")
                continue

            try:
                reply, new_plan = await send_turn(client, url, message, history, plan)
            except (httpx.HTTPError, RuntimeError) as e:
                print(f"Request failed: {e}")
                continue

            history.append({"role": "user", "content": message})
            history.append({"role": "assistant", "content": reply})
            if new_plan:
                plan = new_plan
            print(f"\nplanner> {reply}")


if __name__ == "__main__":
    asyncio.run(main())
