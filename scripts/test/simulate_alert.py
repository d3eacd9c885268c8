# scripts/test/simulate_alert.py
"""Trigger an emergency against a running backend and optionally answer it as a provider."""

import argparse
import requests

BACKEND_URL = "http://localhost:4000/api/v1"


def trigger(user_id, emergency_type, lat, lng, message):
    payload = {"userId": user_id, "emergencyType": emergency_type,
               "location": {"lat": lat, "lng": lng}}
    if message:
        payload["message"] = message
    resp = requests.post(f"{BACKEND_URL}/emergency/alert", json=payload, timeout=60)
    body = resp.json()
    print(f"🚨 Alert → HTTP {resp.status_code}")
    if resp.ok:
        data = body["data"]
        print(f"   {data['message']} | nearby resources: {data['nearbyResourcesCount']}")
        for p in data["providersContacted"]:
            print(f"   ✓ {p['name'] or p['providerUserId']} @ {p['resourceName']} ({p['distance']:.1f}km)")
    else:
        print(f"   {body}")
    return body


def respond(provider_phone, can_respond, message):
    inbox = requests.get(f"{BACKEND_URL}/emergency/user-alerts/{provider_phone}",
                         params={"status": "sent", "limit": 1}, timeout=10).json()
    alerts = inbox["data"]["alerts"]
    if not alerts:
        print(f"📭 No pending alerts for {provider_phone}")
        return
    alert_id = alerts[0]["id"]
    requests.put(f"{BACKEND_URL}/emergency/user-alerts/{alert_id}/read", timeout=10)
    resp = requests.put(f"{BACKEND_URL}/emergency/user-alerts/{alert_id}/respond",
                        json={"canRespond": can_respond, "responseMessage": message}, timeout=10)
    print(f"{'✅' if can_respond else '❌'} Alert {alert_id} → HTTP {resp.status_code}: "
          f"{resp.json()['data']['status']}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate an emergency alert")
    parser.add_argument("--user", default="demo-user-1")
    parser.add_argument("--type", default="medical", choices=["medical", "accident", "blood", "pharmacy"])
    parser.add_argument("--lat", type=float, default=17.385)
    parser.add_argument("--lng", type=float, default=78.4867)
    parser.add_argument("--message", default=None)
    parser.add_argument("--respond-as", default=None, help="provider phone to answer the alert with")
    parser.add_argument("--decline", action="store_true")
    args = parser.parse_args()

    trigger(args.user, args.type, args.lat, args.lng, args.message)
    if args.respond_as:
        respond(args.respond_as, not args.decline, "On our way" if not args.decline else "No ambulance free")
