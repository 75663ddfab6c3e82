from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from accounts.decorators import jwt_required
from config.http import read_json, validate

from .forms import ProposalForm, ProposalUpdateForm
from .services import get_proposal_service


def serialize_proposal(proposal) -> dict:
    return {
        "id": str(proposal.id),
        "title": proposal.title,
        "description": proposal.description,
        "duration": proposal.duration,
        "payment_terms": proposal.payment_terms,
        "status": proposal.status,
        "client_id": proposal.client_id,
        "service_provider_id": proposal.service_provider_id,
        "created_by_id": proposal.created_by_id,
        "created_at": proposal.created_at.isoformat() if proposal.created_at else None,
        "updated_at": proposal.updated_at.isoformat() if proposal.updated_at else None,
    }


@csrf_exempt
@require_http_methods(["GET", "POST"])
@jwt_required
def proposal_collection(request):
    """
    GET: List proposals created by the authenticated user
    POST: Create a proposal on behalf of the authenticated user
    """
    service = get_proposal_service()

    if request.method == "POST":
        data = validate(ProposalForm(read_json(request)))
        proposal = service.create_proposal(data, request.user_id)
        return JsonResponse(serialize_proposal(proposal), status=201)

    result = service.get_all_proposals(request.user_id)
    return JsonResponse({
        "proposals": [serialize_proposal(p) for p in result["proposals"]],
        "count": result["count"],
    })


@csrf_exempt
@require_http_methods(["GET", "PATCH", "DELETE"])
@jwt_required
def proposal_detail(request, proposal_id):
    """
    GET: Fetch one proposal
    PATCH: Apply a partial update
    DELETE: Delete the proposal
    """
    service = get_proposal_service()
    proposal_id = str(proposal_id)

    if request.method == "PATCH":
        form = ProposalUpdateForm(read_json(request))
        validate(form)
        result = service.update_proposal(proposal_id, form.patch())
        return JsonResponse({
            "message": result["message"],
            "proposal": serialize_proposal(result["proposal"]),
        })

    if request.method == "DELETE":
        return JsonResponse(service.delete_proposal(proposal_id))

    return JsonResponse(serialize_proposal(service.get_proposal_by_id(proposal_id)))
