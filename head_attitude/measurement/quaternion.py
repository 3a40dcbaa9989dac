"""
quaternion.py - 쿼터니언 대수 모듈

자세 표현과 상대 자세 계산에 필요한 순수 함수 모음:
- 켤레 (conjugate) - 단위 쿼터니언의 역
- 해밀턴 곱 (multiply) - 회전 합성, 비가환
- 오일러 변환 (to_euler) - 항공 표준 ZYX (intrinsic) 순서

설계 원칙:
1. 내부 처리: 쿼터니언이 기준 (오일러는 표시용 투영)
2. 정규화하지 않음: 단위 노름은 호출자 책임
3. 짐벌 락: 오류 대신 ±π/2 경계값으로 수렴

Version: 1.0
Author: FurSys AI Team
"""

import numpy as np
from scipy.spatial.transform import Rotation
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EulerAngles:
    """
    오일러 각도 (radians)

    Attributes:
        roll: X축 회전
        pitch: Y축 회전 (±π/2에서 짐벌 락)
        yaw: Z축 회전
    """
    roll: float
    pitch: float
    yaw: float

    def to_degrees(self) -> 'EulerAngles':
        """도 단위로 변환"""
        return EulerAngles(
            roll=float(np.rad2deg(self.roll)),
            pitch=float(np.rad2deg(self.pitch)),
            yaw=float(np.rad2deg(self.yaw))
        )

    def to_array(self) -> np.ndarray:
        """numpy 배열로 변환 [roll, pitch, yaw]"""
        return np.array([self.roll, self.pitch, self.yaw])

    def __repr__(self) -> str:
        return f"EulerAngles(R={self.roll:.4f}, P={self.pitch:.4f}, Y={self.yaw:.4f})"


@dataclass(frozen=True)
class Quaternion:
    """
    쿼터니언 (x, y, z, w) - CoreMotion/scipy 형식

    표현: q = w + xi + yj + zk
    모든 소비자는 단위 쿼터니언을 가정하며, 내부에서 재정규화하지 않습니다.
    """
    x: float
    y: float
    z: float
    w: float

    def to_array(self) -> np.ndarray:
        """[x, y, z, w] 형식 (scipy 표준)"""
        return np.array([self.x, self.y, self.z, self.w])

    @property
    def norm(self) -> float:
        """쿼터니언 크기"""
        return float(np.linalg.norm(self.to_array()))

    @property
    def is_unit(self) -> bool:
        """단위 쿼터니언 여부"""
        return abs(self.norm - 1.0) < 1e-6

    @property
    def is_zero(self) -> bool:
        """영 쿼터니언 여부 (회전을 표현할 수 없음)"""
        return self.x == 0 and self.y == 0 and self.z == 0 and self.w == 0

    @property
    def rotation_angle(self) -> float:
        """이 쿼터니언이 나타내는 회전 각도 (도)"""
        return self.angle_to(Quaternion.identity())

    def conjugate(self) -> 'Quaternion':
        return conjugate(self)

    def __mul__(self, other: 'Quaternion') -> 'Quaternion':
        return multiply(self, other)

    def to_euler(self) -> EulerAngles:
        return to_euler(self)

    def dot(self, other: 'Quaternion') -> float:
        """내적"""
        return float(np.dot(self.to_array(), other.to_array()))

    def angle_to(self, other: 'Quaternion') -> float:
        """다른 쿼터니언까지의 각도 (도), q와 -q는 같은 회전"""
        dot = np.clip(abs(self.dot(other)), -1.0, 1.0)
        return float(np.rad2deg(2 * np.arccos(dot)))

    def __repr__(self) -> str:
        return f"Quaternion(x={self.x:.4f}, y={self.y:.4f}, z={self.z:.4f}, w={self.w:.4f})"

    @classmethod
    def identity(cls) -> 'Quaternion':
        """단위 쿼터니언 (회전 없음)"""
        return cls(x=0.0, y=0.0, z=0.0, w=1.0)

    @classmethod
    def from_euler(cls, roll: float, pitch: float, yaw: float) -> 'Quaternion':
        """
        오일러 각도(radians)에서 생성

        to_euler와 같은 ZYX intrinsic 순서 (yaw -> pitch -> roll)를 사용합니다.
        """
        quat_array = Rotation.from_euler('ZYX', [yaw, pitch, roll]).as_quat()
        return cls(
            x=float(quat_array[0]),
            y=float(quat_array[1]),
            z=float(quat_array[2]),
            w=float(quat_array[3])
        )


def conjugate(q: Quaternion) -> Quaternion:
    """
    켤레 쿼터니언 (-x, -y, -z, w)

    q가 단위 쿼터니언일 때만 역과 같습니다. 노름은 검사하지 않습니다.
    """
    return Quaternion(x=-q.x, y=-q.y, z=-q.z, w=q.w)


def multiply(a: Quaternion, b: Quaternion) -> Quaternion:
    """
    해밀턴 곱 a * b (회전 합성)

    비가환: multiply(a, b) != multiply(b, a). 피연산자 순서를 유지해야 합니다.
    """
    return Quaternion(
        x=a.w*b.x + a.x*b.w + a.y*b.z - a.z*b.y,
        y=a.w*b.y - a.x*b.z + a.y*b.w + a.z*b.x,
        z=a.w*b.z + a.x*b.y - a.y*b.x + a.z*b.w,
        w=a.w*b.w - a.x*b.x - a.y*b.y - a.z*b.z
    )


def to_euler(q: Quaternion) -> EulerAngles:
    """
    쿼터니언에서 오일러 각도로 변환 (ZYX, radians)

    pitch 인자는 asin 전에 [-1, 1]로 잘라냅니다.
    짐벌 락(±90°)에서는 pitch가 ±π/2로 포화되며 예외가 발생하지 않습니다.
    """
    # Roll (X축)
    sinr_cosp = 2 * (q.w * q.x + q.y * q.z)
    cosr_cosp = 1 - 2 * (q.x * q.x + q.y * q.y)
    roll = np.arctan2(sinr_cosp, cosr_cosp)

    # Pitch (Y축)
    sinp = 2 * (q.w * q.y - q.z * q.x)
    pitch = np.arcsin(np.clip(sinp, -1.0, 1.0))

    # Yaw (Z축)
    siny_cosp = 2 * (q.w * q.z + q.x * q.y)
    cosy_cosp = 1 - 2 * (q.y * q.y + q.z * q.z)
    yaw = np.arctan2(siny_cosp, cosy_cosp)

    return EulerAngles(roll=float(roll), pitch=float(pitch), yaw=float(yaw))


def compute_relative(primary: Quaternion, secondary: Quaternion) -> Quaternion:
    """
    secondary 기준으로 본 primary의 자세

    relative = primary * conjugate(secondary)
    두 쿼터니언이 같은 기준 좌표계에 대해 표현되어야 의미가 있습니다.
    """
    return multiply(primary, conjugate(secondary))


def is_near_gimbal_lock(pitch: float, threshold_deg: float = 85.0) -> bool:
    """
    짐벌 락 근접 여부 확인

    Pitch가 ±90°에 근접하면 Roll과 Yaw의 구분이 불가능해집니다.

    Args:
        pitch: pitch 각도 (radians)
        threshold_deg: 이 값 이상의 |pitch|(도)를 짐벌 락 근접으로 판단
    """
    return abs(np.rad2deg(pitch)) >= threshold_deg
