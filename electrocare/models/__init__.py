# electrocare/models/__init__.py
from electrocare.models.user_models import User, UserSession
from electrocare.models.activity_models import UserActivity
from electrocare.models.technician_models import Technician
from electrocare.models.service_models import Service
from electrocare.models.quotation_models import Quotation, QuotationEditRequest
from electrocare.models.installation_models import Installation
from electrocare.models.complaint_models import Complaint
from electrocare.models.ticket_models import Ticket
from electrocare.models.calculator_models import CalculatorResult
