"""Call machinery: wire envelopes, throttle, retry policy and response resolution."""
