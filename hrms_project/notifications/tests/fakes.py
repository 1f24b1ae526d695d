from notifications.services.delivery import DeliveryResult


class RecordingGateway:
    """
    In-memory gateway.

    Every call is recorded in `sent`. Tokens listed in `failing_tokens`
    get a failure result; tokens in `raising_tokens` make `send` raise.
    """

    def __init__(self, failing_tokens=(), raising_tokens=()):
        self.sent = []
        self.failing_tokens = set(failing_tokens)
        self.raising_tokens = set(raising_tokens)

    def send(self, token, title, body, data=None):
        if token in self.raising_tokens:
            raise ConnectionError("push service unreachable")

        self.sent.append({
            "token": token,
            "title": title,
            "body": body,
            "data": dict(data or {}),
        })

        if token in self.failing_tokens:
            return DeliveryResult(success=False, error="rejected by push service")
        return DeliveryResult(success=True, message_id=f"msg-{len(self.sent)}")

    @property
    def delivered(self):
        return [call for call in self.sent if call["token"] not in self.failing_tokens]

    def titles(self):
        return [call["title"] for call in self.delivered]

    def bodies_for(self, token):
        return [call["body"] for call in self.delivered if call["token"] == token]
