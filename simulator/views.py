import json
import logging

from django.http import JsonResponse, StreamingHttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .automaton import build_automaton
from .fsa_properties import check_all_properties
from .fsa_simulation import run, simulate_steps
from .reporter import result_to_dict
from .spec_loader import parse_spec_text

logger = logging.getLogger(__name__)


def _load_request(request):
    """
    Parses the JSON body and builds the automaton it describes.

    Raises ValueError (AutomatonError included) for a bad body or automaton.
    """
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')

    spec = data.get('spec')
    if not spec or not isinstance(spec, str):
        raise ValueError('Missing automaton specification')

    input_string = data.get('input', '')
    if not isinstance(input_string, str):
        raise ValueError('input must be a string')

    strict = data.get('strict', False)
    if not isinstance(strict, bool):
        raise ValueError('strict must be a boolean')

    records = parse_spec_text(spec, strict=strict)
    return build_automaton(records), input_string


def _sse(payload) -> str:
    return f"data: {json.dumps(payload)}\n\n"


@csrf_exempt
@require_POST
def simulate_nfa(request):
    """
    Django view to handle NFA simulation requests.

    Expects a POST request with a JSON body containing:
    - spec: The automaton specification in the line format
    - input: The input string to simulate
    - strict: Optional, reject the specification on any malformed line

    Returns a JSON response with the simulation result and the automaton.
    """
    try:
        automaton, input_string = _load_request(request)
        result = run(automaton, input_string)

        response = result_to_dict(result, automaton)
        response['automaton'] = automaton.to_fsa_dict()
        return JsonResponse(response)

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("NFA simulation failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_nfa_stream(request):
    """
    Django view to stream an NFA simulation one input symbol at a time.
    Returns the frontier after every step using Server-Sent Events format.
    """
    try:
        automaton, input_string = _load_request(request)
    except ValueError as e:
        message = str(e)

        def error_generator():
            yield _sse({'error': message})

        return StreamingHttpResponse(error_generator(), content_type='text/event-stream', status=400)

    def result_generator():
        """Generator to stream the simulation steps as Server-Sent Events"""
        try:
            for event in simulate_steps(automaton, input_string):
                yield _sse(event)

            # End-of-stream marker
            yield _sse({'type': 'end'})

        except Exception as e:
            logger.exception("NFA simulation stream failed")
            yield _sse({'type': 'error', 'message': str(e)})

    response = StreamingHttpResponse(result_generator(), content_type='text/event-stream')
    response['Cache-Control'] = 'no-cache'
    response['X-Accel-Buffering'] = 'no'  # Disable nginx buffering
    return response


@csrf_exempt
@require_POST
def check_fsa_properties(request):
    """
    Django view to check the properties of an automaton.
    """
    try:
        automaton, _ = _load_request(request)
        return JsonResponse({
            'properties': check_all_properties(automaton),
            'automaton': automaton.to_fsa_dict()
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Property check failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)
