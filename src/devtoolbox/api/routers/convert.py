"""Convert router - JSON, XML and Base64 tools."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from devtoolbox.api.dependencies import get_conversion_service
from devtoolbox.services.conversion_service import ConversionService

router = APIRouter(prefix="/convert", tags=["convert"])


class ContentRequest(BaseModel):
    content: str


class ConversionResponse(BaseModel):
    result: str
    error: str


@router.post("/json-format", response_model=ConversionResponse)
async def json_format(request: ContentRequest, service: ConversionService = Depends(get_conversion_service)):
    return service.format_json(request.content).to_dict()


@router.post("/json-compact", response_model=ConversionResponse)
async def json_compact(request: ContentRequest, service: ConversionService = Depends(get_conversion_service)):
    return service.compact_json(request.content).to_dict()


@router.post("/xml-format", response_model=ConversionResponse)
async def xml_format(request: ContentRequest, service: ConversionService = Depends(get_conversion_service)):
    return service.format_xml(request.content).to_dict()


@router.post("/xml-to-json", response_model=ConversionResponse)
async def xml_to_json(request: ContentRequest, service: ConversionService = Depends(get_conversion_service)):
    return service.xml_to_json(request.content).to_dict()


@router.post("/base64-encode", response_model=ConversionResponse)
async def base64_encode(request: ContentRequest, service: ConversionService = Depends(get_conversion_service)):
    return service.encode_base64(request.content).to_dict()


@router.post("/base64-decode", response_model=ConversionResponse)
async def base64_decode(request: ContentRequest, service: ConversionService = Depends(get_conversion_service)):
    return service.decode_base64(request.content).to_dict()
