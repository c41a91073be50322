# gptwire

`gptwire` provides typed request and response models for OpenAI-compatible HTTP APIs. It also covers what is needed to put those models on the wire:

- JSON marshalling that merges extra fields into the encoded object
- multipart form building
- request assembly
- parsing of API error bodies

It uses only the standard library.

## Install

```
pip install gptwire
```

To run the test suite:

```
pip install "gptwire[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `gptwire.config` | `APIType`, `ClientConfig`, `default_config`, `default_azure_config`, `default_anthropic_config` |
| `gptwire.marshal` | `marshal`, `unmarshal`, `merge_patch`, `unmarshal_extra_fields`, `MarshalError` |
| `gptwire.request_builder` | `RequestBuilder`, `HTTPRequest` |
| `gptwire.forms` | `FormBuilder` for `multipart/form-data` bodies |
| `gptwire.accumulator` | `ErrorAccumulator`, which collects error bytes that arrive in pieces |
| `gptwire.common` | `Usage`, `PromptTokensDetails`, `CompletionTokensDetails` |
| `gptwire.errors` | `APIError`, `InnerError`, `RequestError`, `parse_error_response` |
| `gptwire.completion` | model name constants, `CompletionRequest`, `CompletionResponse`, `validate_completion_request` and the errors it raises |
| `gptwire.embeddings` | `EmbeddingModel`, `EmbeddingRequest`, `EmbeddingRequestStrings`, `EmbeddingRequestTokens`, `EmbeddingResponse`, `EmbeddingResponseBase64`, `build_embedding_body` |
| `gptwire.edits` | `EditsRequest`, `EditsResponse` |
| `gptwire.engines` | `Engine`, `EnginesList`, `engine_path` |
| `gptwire.files` | `PurposeType`, `FileRequest`, `FileBytesRequest`, `File`, `FilesList`, `build_file_form`, `build_file_bytes_form` |
| `gptwire.fine_tunes` | records of the deprecated fine-tunes endpoint |
| `gptwire.fine_tuning_job` | `FineTuningJob`, `FineTuningJobRequest`, `Hyperparameters`, event lists, `fine_tuning_job_events_path` |
| `gptwire.image` | image request and response models, `wrap_reader`, `build_image_edit_form`, `build_image_variation_form` |

Request models have `to_dict()`. Response models have the classmethod `from_dict()`, which raises `MarshalError` when a member has the wrong JSON type.

## Configuration

```python
from gptwire.config import default_config, default_azure_config, default_anthropic_config

config = default_config("token")
azure = default_azure_config("placeholder", "https://example.com/")
azure.azure_deployment_by_model("gpt-3.5-turbo")   # "gpt-35-turbo"
anthropic = default_anthropic_config("placeholder", "")  # default Anthropic base URL
```

## Building requests

```python
from gptwire.completion import CompletionRequest, validate_completion_request
from gptwire.request_builder import RequestBuilder

request = CompletionRequest(model="babbage-002", prompt="Lorem ipsum", max_tokens=5)
validate_completion_request(request)

http_request = RequestBuilder().build(
    "POST",
    "https://example.com/v1/completions",
    request.to_dict(),
    {"Authorization": "Bearer token"},
)
http_request.body   # JSON bytes
```

`validate_completion_request` can raise one of three errors:

- `CompletionStreamNotSupportedError` when streaming is requested
- `UnsupportedModelError` when the model is a chat model
- `PromptTypeNotSupportedError` when the prompt is neither a string nor a list of strings

How `RequestBuilder.build` treats the body depends on its type:

- Bytes and readable objects are sent as they are.
- Any other body goes through `gptwire.marshal.marshal`. That function adds the members of a non-empty `extra_fields` mapping to the encoded object as a JSON merge patch.

## Embeddings

```python
from gptwire.embeddings import Embedding, EmbeddingResponseBase64

a = Embedding(embedding=[1.0, 2.0, 3.0])
b = Embedding(embedding=[2.0, 4.0, 6.0])
a.dot_product(b)   # 28.0

payload = {"data": [{"embedding": "pHCdP4XrkUDhevxA"}]}
response = EmbeddingResponseBase64.from_dict(payload).to_embedding_response()
response.data[0].embedding   # three float32 values, about [1.23, 4.56, 7.89]
```

`dot_product` raises `VectorLengthMismatchError` for vectors of different lengths.

`build_embedding_body` returns the JSON body for any of the three embedding request kinds. It merges `extra_body` into the top level of that body.

## Errors

`parse_error_response` turns a body of the form `{"error": {...}}` into an `APIError`. It returns `None` when the body holds no error object. A `message` given as a list of strings is joined with `", "`, and an integer `code` stays an integer.

`RequestError` carries the HTTP status, the status code, the underlying error and the raw body, for failures that are not API errors.

## Multipart uploads

`FormBuilder` writes `multipart/form-data` parts onto a binary stream. After `close()`, `form_data_content_type()` gives the header value to send.

The helpers `build_file_form`, `build_file_bytes_form`, `build_image_edit_form` and `build_image_variation_form` fill a builder from a request object and return the content type.

## What this package does not do

`gptwire` builds requests and decodes responses; it does not send anything. It has:

- no HTTP client that performs requests
- no URL building for the API types
- no authentication headers
- no streaming
- no chat-completion, audio or assistant models

`ClientConfig.http_client` is only a slot for an object you supply; nothing in the package calls it.