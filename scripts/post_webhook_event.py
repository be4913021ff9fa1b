#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import time
from typing import Any

import httpx
from httpx import ConnectError


def build_text_event(sender: str, text: str) -> dict[str, Any]:
    now = int(time.time())
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "WABA_ID",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "messages": [
                                {
                                    "from": sender,
                                    "id": f"wamid.test_{now}",
                                    "timestamp": str(now),
                                    "type": "text",
                                    "text": {"body": text},
                                }
                            ],
                        },
                    }
                ],
            }
        ],
    }


def build_status_event(message_id: str, status: str, recipient: str) -> dict[str, Any]:
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "WABA_ID",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "statuses": [
                                {
                                    "id": message_id,
                                    "status": status,
                                    "timestamp": str(int(time.time())),
                                    "recipient_id": recipient,
                                }
                            ],
                        },
                    }
                ],
            }
        ],
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Exercise the WhatsApp webhook of a running relay")
    parser.add_argument("--url", default="http://127.0.0.1:3000/webhook")
    parser.add_argument("--sender", default="15550001111")
    parser.add_argument("--text", default="Hello from the test script")
    parser.add_argument("--status", choices=["sent", "delivered", "read", "failed"], help="post a status event instead")
    parser.add_argument("--message-id", default="wamid.test_outbound")
    parser.add_argument("--verify-token", default="", help="run the subscription handshake first")
    args = parser.parse_args()

    try:
        if args.verify_token:
            params = {"hub.mode": "subscribe", "hub.verify_token": args.verify_token, "hub.challenge": "challenge_ok"}
            resp = httpx.get(args.url, params=params, timeout=10.0)
            print("handshake", resp.status_code, resp.text)

        if args.status:
            payload = build_status_event(args.message_id, args.status, args.sender)
        else:
            payload = build_text_event(args.sender, args.text)
        resp = httpx.post(
            args.url,
            content=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            timeout=10.0,
        )
    except ConnectError:
        print("Connection refused. Is the relay running?")
        print("Try: uvicorn washield.main:app --reload --port 3000")
        return

    print(resp.status_code)
    if resp.text:
        print(resp.text)


if __name__ == "__main__":
    main()
