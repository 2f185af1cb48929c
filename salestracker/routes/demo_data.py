"""Demo data routes."""
from fastapi import APIRouter, Depends, status

from salestracker.dependencies import get_demo_data_flag_service, get_demo_data_service
from salestracker.schemas.demo_data import DemoDataLoadResult, DemoDataStatus
from salestracker.services.demo_data import DemoDataFlagService, DemoDataService, load_demo_data

router = APIRouter(prefix="/demo-data", tags=["Demo Data"])


@router.get("/status", response_model=DemoDataStatus)
async def get_demo_data_status(
    flag_service: DemoDataFlagService = Depends(get_demo_data_flag_service)
):
    """Whether demo data has been loaded."""
    return DemoDataStatus(loaded=await flag_service.is_demo_data_loaded())


@router.post("/load", response_model=DemoDataLoadResult)
async def load_demo(
    demo_service: DemoDataService = Depends(get_demo_data_service),
    flag_service: DemoDataFlagService = Depends(get_demo_data_flag_service)
):
    """Load demo items and orders once."""
    created = await load_demo_data(demo_service, flag_service)
    return DemoDataLoadResult(created=created)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def clear_demo_data(
    demo_service: DemoDataService = Depends(get_demo_data_service),
    flag_service: DemoDataFlagService = Depends(get_demo_data_flag_service)
):
    """Delete all items and orders and reset the demo data flag."""
    await demo_service.clear_all_data()
    await flag_service.clear_demo_data_flag()
    return None
