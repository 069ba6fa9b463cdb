import httpx
import asyncio
import os

# This is a simple utility to check if a local gateway is running and responsive.
# It can be used to quickly diagnose connection issues.

async def main():
    url = os.environ.get("CHECK_SERVER_URL", "http://127.0.0.1:3001/api/health")

    print(f"Checking server at: {url}")
    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(url)
            print(f"Status Code: {response.status_code}")
            print(f"Body: {response.text}")
    except httpx.ConnectError as e:
        print(f"Connection failed: {e}")
    except httpx.HTTPError as e:
        print(f"Request failed: {e}")

if __name__ == "__main__":
    asyncio.run(main())
