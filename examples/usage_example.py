"""
Usage Examples for the f9 HTTP client
Demonstrates configuration, calls, listeners and replay
"""

import logging

from f9 import (
    ConfigLoader,
    ConfigValidator,
    F9Client,
    FormData,
    ResponseEnvelope,
    WILDCARD,
)


# =============================================================================
# Example 1: Programmatic Configuration
# =============================================================================

def programmatic_client_example() -> F9Client:
    """Configure the client with keyword options"""
    return F9Client(
        base_path="https://jsonplaceholder.typicode.com",
        auth={"type": "Bearer", "token": "your-api-token"},
        credentials="include",
        timeout=10000,
    )


# =============================================================================
# Example 2: File and Environment Configuration
# =============================================================================

def loaded_client_example() -> F9Client:
    """
    Load configuration from a JSON file, overridden by environment variables

    export F9_BASE_PATH="https://api.example.com"
    export F9_AUTH_TYPE="Bearer"
    export F9_AUTH_TOKEN="your-api-token"
    """
    loader = ConfigLoader()
    config = loader.load(file="./config/f9_config.json", env=True)
    return F9Client(config)


# =============================================================================
# Example 3: Calls
# =============================================================================

def calls_example(client: F9Client) -> None:
    """Every call returns an envelope, never raises for HTTP failures"""
    result = client.get("/todos/1")
    if result.success:
        print(f"  todo: {result.data}")
    else:
        print(f"  failed with {result.status}: {result.message}")

    # Extra keyword arguments become the JSON body
    created = client.post("/posts", title="hello", body_text="world", userId=1)
    print(f"  created: {created.status} in {created.metadata.processing_time:.1f}ms")

    # Plain text response
    page = client.get("/", options={"response_type": "text"})
    print(f"  page length: {len(page.data or '')}")

    # Multipart upload
    form = FormData()
    form.append("title", "report")
    form.append_file("file", b"id,total\n1,10\n", "report.csv", "text/csv")
    client.post("/uploads", body=form)


# =============================================================================
# Example 4: Listeners and Replay
# =============================================================================

def listeners_example(client: F9Client) -> None:
    """Status listeners, interceptors and retrying a failed call"""

    def retry_once(envelope: ResponseEnvelope) -> ResponseEnvelope:
        # The replay replaces the envelope the caller receives
        return client.retry(envelope)

    client.on_status(503, retry_once)
    client.on_status(WILDCARD, lambda envelope: print(f"  <- {envelope.status}"))
    client.on_request(lambda metadata: print(f"  -> {metadata.request_name}"))

    client.get("/todos/2")


# =============================================================================
# Example 5: Configuration Validation
# =============================================================================

def validation_example() -> None:
    """Validate configuration before use"""
    validator = ConfigValidator()

    result = validator.validate({
        "base_path": "https://api.example.com",
        "timeout": 10,
        "credentials": "sometimes",
    })

    if not result.valid:
        print("Configuration validation failed:")
        for error in result.errors:
            print(f"  - {error.field}: {error.message}")


# =============================================================================
# Run Examples
# =============================================================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("=== f9 Client Examples ===\n")

    print("5. Configuration Validation:")
    validation_example()
    print()

    with programmatic_client_example() as client:
        print("3. Calls:")
        calls_example(client)
        print()

        print("4. Listeners and Replay:")
        listeners_example(client)
