import logging
import math
from contextlib import asynccontextmanager
from typing import List, Optional

import cv2
import numpy as np
import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from face_attendance.config import settings
from face_attendance.core.pipeline import initialize

logger = logging.getLogger(__name__)


# ============================================================================
# DATA MODELS
# ============================================================================
class AttendanceRecordModel(BaseModel):
    name: str
    date: str
    weekday: str


class TodayAttendance(BaseModel):
    date: str
    count: int
    names: List[str]


class Stats(BaseModel):
    date: str
    enrolled: int
    marked_today: int


class FaceResultModel(BaseModel):
    box: List[int]
    track_id: int
    name: Optional[str]
    distance: Optional[float]
    status: str
    message: str
    record: Optional[AttendanceRecordModel] = None


def face_result_to_model(result):
    record = result.outcome.record
    distance = result.match.distance
    return FaceResultModel(
        box=list(result.box),
        track_id=result.track_id,
        name=getattr(result.match, "identity", None),
        distance=distance if math.isfinite(distance) else None,
        status=result.outcome.status.value,
        message=result.message,
        record=AttendanceRecordModel(name=record.identity, date=record.date,
                                     weekday=record.weekday) if record else None,
    )


def decode_frame(data):
    nparr = np.frombuffer(data, np.uint8)
    if nparr.size == 0:
        return None
    return cv2.imdecode(nparr, cv2.IMREAD_COLOR)


# ============================================================================
# APP
# ============================================================================
def create_app(pipeline=None):
    """Build the API; without a pipeline one is initialized from settings at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.pipeline is None:
            result = initialize()
            if not result.ok:
                raise RuntimeError(f"Startup failed: {result.error}")
            app.state.pipeline = result.pipeline
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.pipeline = pipeline
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_credentials=True,
                       allow_methods=["*"], allow_headers=["*"])

    @app.get("/api/users", response_model=List[str])
    async def get_users():
        return app.state.pipeline.gallery.identities()

    @app.get("/api/attendance/today", response_model=TodayAttendance)
    async def get_today():
        ledger = app.state.pipeline.ledger
        names = ledger.today_identities()
        return TodayAttendance(date=ledger.today, count=len(names), names=names)

    @app.get("/api/attendance", response_model=List[AttendanceRecordModel])
    async def get_attendance():
        return [
            AttendanceRecordModel(name=r.identity, date=r.date, weekday=r.weekday)
            for r in app.state.pipeline.ledger.records()
        ]

    @app.get("/api/stats", response_model=Stats)
    async def get_stats():
        pipeline = app.state.pipeline
        return Stats(date=pipeline.ledger.today, enrolled=len(pipeline.gallery),
                     marked_today=len(pipeline.ledger.today_identities()))

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await websocket.accept()
        try:
            while True:
                data = await websocket.receive_bytes()
                frame = decode_frame(data)
                if frame is None:
                    await websocket.send_json({"type": "error", "message": "Invalid image"})
                    continue

                try:
                    results = app.state.pipeline.process_frame(frame)
                except OSError as e:
                    logger.error(f"Frame skipped: {e}")
                    await websocket.send_json({"type": "error", "message": "Attendance log unavailable"})
                    continue

                await websocket.send_json({
                    "type": "result",
                    "faces": [face_result_to_model(r).model_dump() for r in results],
                })
        except WebSocketDisconnect:
            logger.info("Kiosk disconnected")

    return app


def main():
    settings.setup_logging()
    uvicorn.run(create_app(), host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    main()
